"""Tests for frame recording and JSON export."""

import json

from freekick.core.entities import ShotParameters
from freekick.export import FrameRecorder


class TestFrameRecorder:
    """Tests for FrameRecorder."""

    def test_records_every_frame(self, scripted_sim):
        recorder = FrameRecorder()
        scripted_sim.run_attempt(ShotParameters(power=100), on_frame=recorder.record)

        assert len(recorder.frames) > 13
        assert recorder.export.outcomes == ["goal"]

    def test_sampling_interval(self, scripted_sim):
        every = FrameRecorder()
        sampled = FrameRecorder(every=3)
        for _ in range(9):
            scripted_sim.advance()
            snap = scripted_sim.snapshot()
            every.record(snap)
            sampled.record(snap)

        assert len(every.frames) == 9
        assert [f.tick for f in sampled.frames] == [1, 4, 7]

    def test_max_frames(self, scripted_sim):
        recorder = FrameRecorder(max_frames=4)
        for _ in range(10):
            scripted_sim.advance()
            recorder.record(scripted_sim.snapshot())

        assert len(recorder.frames) == 4

    def test_repeated_outcomes_recorded_per_attempt(self, scripted_sim):
        recorder = FrameRecorder()
        scripted_sim.run_attempt(ShotParameters(power=100), on_frame=recorder.record)
        scripted_sim.load_scenario(scripted_sim.generator.build(560.0, 400.0, 0))
        scripted_sim.run_attempt(ShotParameters(power=100), on_frame=recorder.record)

        assert recorder.export.outcomes == ["goal", "goal"]

    def test_json_round_trip(self, scripted_sim, tmp_path):
        recorder = FrameRecorder(every=2)
        scripted_sim.run_attempt(ShotParameters(power=100), on_frame=recorder.record)

        path = recorder.save(tmp_path / "session.json")
        data = json.loads(path.read_text())

        assert data["frame_count"] == len(recorder.frames)
        assert data["outcomes"] == ["goal"]
        first = data["frames"][0]
        assert first["phase"] == "approach"
        assert set(first["ball"]) == {"x", "y", "z", "render_radius", "visual_y"}
