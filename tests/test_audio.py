import pygame
import pytest

from sudoku_game.audio import AMPLITUDE, BUFFER_SIZE, CUES, SAMPLE_RATE, SoundBoard, mix_cue, tone_samples


@pytest.mark.parametrize("waveform", ["sine", "sawtooth", "triangle"])
def test_tone_samples_length_and_range(waveform):
    samples = tone_samples(440, 0.1, waveform)
    assert len(samples) == int(SAMPLE_RATE * 0.1)
    assert all(-AMPLITUDE <= s <= AMPLITUDE for s in samples)


def test_tone_decays():
    samples = tone_samples(200, 0.3, "sawtooth")
    first = max(abs(s) for s in samples[:500])
    last = max(abs(s) for s in samples[-500:])
    assert last < first / 10


def test_unknown_waveform():
    with pytest.raises(ValueError):
        tone_samples(440, 0.1, "square")


def test_success_cue_spans_all_notes():
    samples = mix_cue(CUES["success"])
    assert len(samples) == int(SAMPLE_RATE * 0.4)


def test_soundboard_silent_without_mixer(monkeypatch):
    def broken():
        raise pygame.error("no audio device")

    monkeypatch.setattr(pygame.mixer, "get_init", broken)
    board = SoundBoard()

    assert not board.enabled
    board.play("place")


def test_soundboard_opens_mono_mixer(monkeypatch):
    state = {"init": None}
    opened = []

    def get_init():
        return state["init"]

    def init(**kwargs):
        opened.append(kwargs)
        state["init"] = (kwargs["frequency"], kwargs["size"], kwargs["channels"])

    class StubSound:
        def __init__(self, buffer):
            self.buffer = buffer
            self.plays = 0

        def play(self):
            self.plays += 1

    monkeypatch.setattr(pygame.mixer, "get_init", get_init)
    monkeypatch.setattr(pygame.mixer, "init", init)
    monkeypatch.setattr(pygame.mixer, "Sound", StubSound)

    board = SoundBoard()

    assert opened == [{"frequency": SAMPLE_RATE, "size": -16, "channels": 1, "buffer": BUFFER_SIZE}]
    assert board.enabled
    assert set(board.sounds) == set(CUES)
    # 16-bit mono: two bytes per sample
    assert len(board.sounds["click"].buffer) == 2 * int(SAMPLE_RATE * 0.05)

    board.play("error")
    assert board.sounds["error"].plays == 1
