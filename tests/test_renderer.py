import os
import tempfile
import unittest
from unittest.mock import patch

from PIL import Image, ImageDraw

from support import count_pixels_not, find_font, write_image
from text_image import (
    Border,
    Color,
    DecodeError,
    EncoderSettings,
    ImageFormat,
    RenderSpec,
    TextOffset,
    render,
)
from text_image.core import renderer
from text_image.core.canvas import Canvas

WHITE = Color(255, 255, 255)
BLACK = Color(0, 0, 0)


class TestRender(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.settings = EncoderSettings(temp_dir=self.tmp.name)
        self.font = find_font()

    def tearDown(self):
        self.tmp.cleanup()

    def spec(self, **kw):
        base = dict(
            full_width=200,
            full_height=100,
            border=Border(0, 0, 0, 0),
            background_color=WHITE,
            font_path=self.font,
            font_size=14,
            text_color=BLACK,
            text_offset=TextOffset(10, 20),
            line_height=20,
        )
        base.update(kw)
        return RenderSpec(**base)

    def path(self, name):
        return os.path.join(self.tmp.name, name)

    def test_single_line_white_png(self):
        result = render(self.spec(lines=["Hi"], strip_text=True, format=ImageFormat.PNG), self.settings)
        self.assertEqual(result.format, ImageFormat.PNG)
        with Image.open(result.file_path) as img:
            self.assertEqual(img.format, "PNG")
            self.assertEqual(img.size, (200, 100))
            self.assertEqual(img.mode, "RGB")
            self.assertEqual(img.getpixel((199, 99)), (255, 255, 255))
            self.assertGreater(count_pixels_not(img.crop((0, 0, 60, 30)), (255, 255, 255)), 0)
            self.assertEqual(count_pixels_not(img.crop((0, 40, 200, 100)), (255, 255, 255)), 0)

    def test_three_lines(self):
        spec = self.spec(lines=["A", "B", "C"], strip_text=False, line_height=20, text_offset=TextOffset(10, 10))
        with patch.object(ImageDraw.ImageDraw, "text", autospec=True) as text:
            render(spec, self.settings)
        self.assertEqual([c.args[1][1] for c in text.call_args_list], [10, 30, 50])

    def test_strip_with_many_lines(self):
        spec = self.spec(lines=["A", "B", "C"], strip_text=True)
        with patch.object(ImageDraw.ImageDraw, "text", autospec=True) as text:
            render(spec, self.settings)
        self.assertEqual(text.call_count, 1)

    def test_transparent_background(self):
        result = render(self.spec(transparent_background=True, border=Border(5, 5, 5, 5)), self.settings)
        with Image.open(result.file_path) as img:
            self.assertEqual(img.mode, "RGBA")
            self.assertEqual(img.getchannel("A").getextrema(), (0, 0))

    def test_bmp_falls_back_to_png(self):
        result = render(self.spec(format="bmp"), self.settings)
        self.assertEqual(result.format.value, "png")
        self.assertTrue(result.file_path.endswith(".png"))

    def test_jpg_and_gif(self):
        for fmt, pil in (("jpg", "JPEG"), ("gif", "GIF")):
            result = render(self.spec(lines=["x"], format=fmt), self.settings)
            with Image.open(result.file_path) as img:
                self.assertEqual(img.format, pil)

    def test_background_file(self):
        bg = write_image(self.path("bg.jpg"), (120, 80), (0, 128, 0), "JPEG", mode="RGB")
        result = render(self.spec(background_image_path=bg, full_width=10, full_height=10), self.settings)
        with Image.open(result.file_path) as img:
            self.assertEqual(img.size, (120, 80))
            r, g, b = img.convert("RGB").getpixel((100, 70))
            self.assertTrue(r < 20 and 110 < g < 145 and b < 20)

    def test_watermarks_together(self):
        wm = write_image(self.path("wm.png"), (20, 20), (255, 0, 0, 255), "PNG")
        spec = self.spec(watermark_image_path=wm, watermark_text="SAMPLE", watermark_text_opacity=0.5)
        result = render(spec, self.settings)
        with Image.open(result.file_path) as img:
            colors = {c for _, c in img.getcolors(200 * 100)}
            self.assertIn((255, 0, 0), colors)
            self.assertGreater(count_pixels_not(img.crop((0, 0, 40, 100)), (255, 255, 255)), 0)

    def test_empty_watermark_text_skipped(self):
        with patch.object(renderer, "apply_text_watermark") as text_wm, \
                patch.object(renderer, "apply_image_watermark") as image_wm:
            render(self.spec(watermark_text="", watermark_image_path=""), self.settings)
        text_wm.assert_not_called()
        image_wm.assert_not_called()

    def test_missing_background_fails(self):
        with self.assertRaises(DecodeError):
            render(self.spec(background_image_path=self.path("nope.png")), self.settings)
        self.assertEqual(os.listdir(self.tmp.name), [])

    def test_failed_watermark_releases_canvas(self):
        created = []
        real = renderer.create_canvas

        def tracking(spec):
            canvas = real(spec)
            created.append(canvas)
            return canvas

        with patch.object(renderer, "create_canvas", side_effect=tracking):
            with self.assertRaises(DecodeError):
                render(self.spec(watermark_image_path=self.path("nope.png")), self.settings)
        self.assertEqual(len(created), 1)
        self.assertIsInstance(created[0], Canvas)
        self.assertTrue(created[0].released)
        self.assertEqual(os.listdir(self.tmp.name), [])


if __name__ == "__main__":
    unittest.main()
