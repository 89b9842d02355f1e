# -*- coding: utf-8 -*-

from studytimer.audio.cues import AudioCueController, NullAudioBackend


class BrokenBackend:
    def play(self, cue_id):
        raise RuntimeError("no audio device")

    def loop(self, cue_id, playing):
        raise RuntimeError("no audio device")

    def set_volume(self, percent):
        raise RuntimeError("no audio device")


def loops(backend):
    return [c for c in backend.calls if c[0] == "loop"]


def test_loop_follows_running():
    b = NullAudioBackend()
    a = AudioCueController(b)
    a.set_running(True)
    assert a.looping
    a.set_running(False)
    assert not a.looping
    assert loops(b) == [("loop", "ticking", True), ("loop", "ticking", False)]


def test_mute_while_running_stops_loop_immediately():
    b = NullAudioBackend()
    a = AudioCueController(b)
    a.set_running(True)
    a.set_muted(True)
    assert not a.looping
    assert loops(b)[-1] == ("loop", "ticking", False)

    a.set_running(True)
    assert loops(b)[-1] == ("loop", "ticking", False)

    a.set_muted(False)
    assert a.looping
    assert loops(b)[-1] == ("loop", "ticking", True)


def test_muted_start_never_loops():
    b = NullAudioBackend()
    a = AudioCueController(b, muted=True)
    a.set_running(True)
    assert loops(b) == []


def test_alarm_respects_mute():
    b = NullAudioBackend()
    a = AudioCueController(b)
    a.play_completion()
    a.set_muted(True)
    a.play_completion()
    assert [c for c in b.calls if c[0] == "play"] == [("play", "alarm")]


def test_volume_clamped_and_applied_without_restart():
    b = NullAudioBackend()
    a = AudioCueController(b, volume=70)
    a.set_running(True)
    a.set_volume(150)
    a.set_volume(-4)
    a.set_volume(35)
    assert a.volume == 35
    assert [c for c in b.calls if c[0] == "volume"] == [
        ("volume", 70),
        ("volume", 100),
        ("volume", 0),
        ("volume", 35),
    ]
    assert loops(b) == [("loop", "ticking", True)]


def test_backend_failures_are_swallowed(caplog):
    a = AudioCueController(BrokenBackend())
    a.set_running(True)
    a.set_muted(True)
    a.set_volume(20)
    a.play_completion()
    a.set_muted(False)
    a.play_completion()
    assert "audio backend" in caplog.text
