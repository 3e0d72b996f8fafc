import logging
import math
from array import array

import pygame

logger = logging.getLogger(__name__)

SAMPLE_RATE = 22050
BUFFER_SIZE = 512
AMPLITUDE = 32767
START_GAIN = 0.3
END_GAIN = 0.01

# cue name -> [(offset seconds, frequency Hz, duration seconds, waveform)]
CUES = {
    "place": [(0.0, 800, 0.1, "sine")],
    "error": [(0.0, 200, 0.3, "sawtooth")],
    "undo": [(0.0, 400, 0.15, "triangle")],
    "click": [(0.0, 600, 0.05, "sine")],
    # C-E-G arpeggio
    "success": [(0.0, 523, 0.2, "sine"), (0.1, 659, 0.2, "sine"), (0.2, 784, 0.2, "sine")],
}


def _wave(waveform, phase):
    if waveform == "sine":
        return math.sin(2 * math.pi * phase)
    if waveform == "sawtooth":
        return 2 * phase - 1
    if waveform == "triangle":
        return 1 - 4 * abs(phase - 0.5)
    raise ValueError(f"Unknown waveform: {waveform}")


def tone_samples(frequency, duration, waveform="sine", sample_rate=SAMPLE_RATE):
    """
    Renders one tone as signed 16-bit mono samples.
    The gain decays exponentially from START_GAIN to END_GAIN over the tone.
    """
    count = int(sample_rate * duration)
    samples = array("h")
    for n in range(count):
        t = n / sample_rate
        gain = START_GAIN * (END_GAIN / START_GAIN) ** (t / duration)
        phase = (frequency * t) % 1.0
        samples.append(int(AMPLITUDE * gain * _wave(waveform, phase)))
    return samples


def mix_cue(parts, sample_rate=SAMPLE_RATE):
    """Overlays the tones of a cue at their offsets, clipping to 16 bits."""
    length = max(int(sample_rate * (offset + duration)) for offset, _f, duration, _w in parts)
    mixed = [0] * length
    for offset, frequency, duration, waveform in parts:
        start = int(sample_rate * offset)
        for i, sample in enumerate(tone_samples(frequency, duration, waveform, sample_rate)):
            mixed[start + i] += sample
    return array("h", (max(-AMPLITUDE, min(AMPLITUDE, s)) for s in mixed))


class SoundBoard:
    """Plays the feedback cues; turns silent when no audio device is available."""

    def __init__(self):
        self.sounds = {}
        try:
            if not pygame.mixer.get_init():
                pygame.mixer.init(frequency=SAMPLE_RATE, size=-16, channels=1, buffer=BUFFER_SIZE)
            frequency, _size, channels = pygame.mixer.get_init()
            for name, parts in CUES.items():
                samples = mix_cue(parts, frequency)
                if channels > 1:
                    samples = array("h", (s for s in samples for _ in range(channels)))
                self.sounds[name] = pygame.mixer.Sound(buffer=samples.tobytes())
        except pygame.error as exc:
            logger.warning("Audio disabled: %s", exc)
            self.sounds = {}

    @property
    def enabled(self):
        return bool(self.sounds)

    def play(self, name):
        sound = self.sounds.get(name)
        if sound is not None:
            sound.play()
