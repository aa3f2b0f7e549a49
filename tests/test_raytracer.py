import io

import numpy as np
import pytest

from camera.camera import Camera
from core.vector import Vector3
from geometry.world import HittableList
from renderer import raytracer
from renderer.raytracer import ProgressCounter, Renderer, RowSeeder, partition_rows
from scenes import build_scene


class TestPartitionRows:

    def test_every_row_assigned_exactly_once(self):
        ranges = partition_rows(97, 8)
        assert len(ranges) == 8
        rows = [j for start, end in ranges for j in range(start, end)]
        assert sorted(rows) == list(range(97))
        assert len(rows) == len(set(rows))

    def test_ranges_are_contiguous_and_last_takes_remainder(self):
        ranges = partition_rows(97, 8)
        for (_, end), (next_start, _) in zip(ranges, ranges[1:]):
            assert end == next_start
        assert ranges[0] == (0, 12)
        assert ranges[-1] == (84, 97)

    def test_single_worker_gets_everything(self):
        assert partition_rows(10, 1) == [(0, 10)]

    def test_more_workers_than_rows(self):
        ranges = partition_rows(3, 5)
        rows = [j for start, end in ranges for j in range(start, end)]
        assert rows == [0, 1, 2]

    def test_rejects_zero_workers(self):
        with pytest.raises(ValueError):
            partition_rows(10, 0)


def test_default_worker_count_falls_back_to_one(monkeypatch):
    monkeypatch.setattr(raytracer.os, "cpu_count", lambda: None)
    assert raytracer.default_worker_count() == 1


class TestRowSeeder:

    def test_same_row_same_stream(self):
        a, b = RowSeeder(5)(3), RowSeeder(5)(3)
        assert [a.random() for _ in range(5)] == [b.random() for _ in range(5)]

    def test_rows_get_distinct_streams(self):
        seeder = RowSeeder(5)
        assert seeder(0).random() != seeder(1).random()


class TestProgressCounter:

    def test_reports_every_ten_scanlines(self):
        stream = io.StringIO()
        counter = ProgressCounter(25, stream)
        for _ in range(25):
            counter.decrement()
        assert counter.remaining == 0
        reports = [line.strip() for line in stream.getvalue().split("\r") if line]
        assert reports == ["Scanlines remaining: 20", "Scanlines remaining: 10",
                           "Scanlines remaining: 0"]

    def test_bulk_decrement_reports_crossing(self):
        stream = io.StringIO()
        counter = ProgressCounter(97, stream)
        assert counter.decrement(13) == 84
        assert "Scanlines remaining: 84" in stream.getvalue()

    def test_silent_without_stream(self):
        counter = ProgressCounter(3)
        counter.scanline_done(0)
        assert counter.remaining == 2


class TestRenderer:

    def test_ground_sphere_two_by_two(self, ground_world):
        camera = Camera(aspect_ratio=1.0, image_width=2, samples_per_pixel=1, max_depth=1,
                        lookfrom=Vector3(0, 0, 0), lookat=Vector3(0, 0, -1))
        pixels = Renderer(camera, workers=2, seed=42).render(ground_world)
        assert pixels.shape == (2, 2, 3)
        # Upper row misses and shows the sky gradient
        for r, g, b in pixels[0]:
            assert 0.5 <= r <= 1.0
            assert 0.7 <= g <= 1.0
            assert b == pytest.approx(1.0)
        # Lower row hits the ground and runs out of bounces
        assert np.all(pixels[1] == 0.0)

    def test_every_cell_written(self):
        camera = Camera(aspect_ratio=2.0, image_width=10, samples_per_pixel=1)
        pixels = Renderer(camera, workers=3, seed=1).render(HittableList())
        assert pixels.shape == (5, 10, 3)
        assert np.all(pixels > 0)

    def test_seeded_render_independent_of_worker_count(self):
        world, camera_kwargs = build_scene("materials", seed=3)
        camera = Camera(aspect_ratio=2.0, image_width=8, samples_per_pixel=2, max_depth=5,
                        **camera_kwargs)
        one = Renderer(camera, workers=1, seed=7).render(world)
        three = Renderer(camera, workers=3, seed=7).render(world)
        assert np.array_equal(one, three)

    @pytest.mark.slow
    def test_process_backend_matches_threads(self):
        world, camera_kwargs = build_scene("ground", seed=3)
        camera = Camera(aspect_ratio=2.0, image_width=6, samples_per_pixel=2, max_depth=4,
                        **camera_kwargs)
        threads = Renderer(camera, workers=2, seed=11).render(world)
        processes = Renderer(camera, workers=2, backend="process", seed=11).render(world)
        assert np.array_equal(threads, processes)

    def test_progress_and_timing(self):
        stream = io.StringIO()
        camera = Camera(aspect_ratio=1.0, image_width=4, samples_per_pixel=1)
        renderer = Renderer(camera, workers=2, seed=0, progress_stream=stream)
        renderer.render(HittableList())
        assert renderer.elapsed >= 0
        assert "Scanlines remaining: 0" in stream.getvalue()
        assert stream.getvalue().endswith("\n")

    def test_worker_errors_propagate(self):
        class Broken(HittableList):
            def hit(self, ray, ray_t):
                raise RuntimeError("boom")

        camera = Camera(aspect_ratio=1.0, image_width=2, samples_per_pixel=1)
        with pytest.raises(RuntimeError, match="boom"):
            Renderer(camera, workers=2, seed=0).render(Broken())

    @pytest.mark.parametrize("kwargs", [{"backend": "gpu"}, {"workers": 0}])
    def test_rejects_bad_configuration(self, kwargs):
        with pytest.raises(ValueError):
            Renderer(Camera(image_width=2), **kwargs)
