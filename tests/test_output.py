import io

import numpy as np
import pytest
from PIL import Image

from renderer.output import save_image, write_ppm
from renderer.tone_mapping import gamma_tone_mapping, linear_to_gamma


class TestToneMapping:

    def test_gamma_then_clamp_then_quantize(self):
        linear = np.array([[[0.0, 0.25, 1.0], [4.0, -1.0, 0.01]]])
        rgb = gamma_tone_mapping(linear)
        assert rgb.dtype == np.uint8
        assert rgb.tolist() == [[[0, 128, 255], [255, 0, 25]]]

    def test_linear_to_gamma_zeroes_negatives(self):
        assert linear_to_gamma(np.array([-0.5, 0.0, 0.81])).tolist() == pytest.approx([0.0, 0.0, 0.9])


class TestPpm:

    def test_plain_text_layout(self):
        rgb = np.array([[[255, 0, 0], [0, 128, 255]]], dtype=np.uint8)
        stream = io.StringIO()
        write_ppm(stream, rgb)
        assert stream.getvalue() == "P3\n2 1\n255\n255 0 0\n0 128 255\n"

    def test_rows_are_written_top_to_bottom(self):
        rgb = np.zeros((2, 1, 3), dtype=np.uint8)
        rgb[0, 0] = (1, 2, 3)
        rgb[1, 0] = (4, 5, 6)
        stream = io.StringIO()
        write_ppm(stream, rgb)
        assert stream.getvalue().splitlines()[3:] == ["1 2 3", "4 5 6"]


class TestSaveImage:

    @pytest.fixture
    def rgb(self):
        return np.arange(2 * 3 * 3, dtype=np.uint8).reshape(2, 3, 3) * 10

    def test_ppm_file(self, tmp_path, rgb):
        path = tmp_path / "out.ppm"
        save_image(path, rgb)
        lines = path.read_text().splitlines()
        assert lines[:3] == ["P3", "3 2", "255"]
        assert len(lines) == 3 + 6

    def test_png_round_trips_through_pillow(self, tmp_path, rgb):
        path = tmp_path / "out.png"
        save_image(path, rgb)
        with Image.open(path) as img:
            assert img.size == (3, 2)
            assert np.array_equal(np.array(img), rgb)

    def test_dash_writes_stdout(self, capsys, rgb):
        save_image("-", rgb)
        assert capsys.readouterr().out.startswith("P3\n3 2\n255\n")


def test_preview_surface_size(monkeypatch):
    monkeypatch.setenv("SDL_VIDEODRIVER", "dummy")
    from renderer.preview import to_surface

    surface = to_surface(np.zeros((4, 6, 3), dtype=np.uint8))
    assert surface.get_size() == (6, 4)
