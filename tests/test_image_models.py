"""
Unit tests for image_models module.

Tests the PixelBuffer invariants (shape, range, immutability), conversion
to and from PIL Images, and CropRect helpers.
"""

import numpy as np
import pytest
from PIL import Image

from PM_Libs.errors import InvalidParameterError
from PM_Libs.ImageEditingLib.image_models import CropRect, PixelBuffer


class TestPixelBufferCreation:
    """Tests for PixelBuffer construction and validation."""

    def test_sample_count_matches_dimensions(self):
        """Should hold exactly width * height * 4 samples."""
        buffer = PixelBuffer.filled(5, 3, (0.1, 0.2, 0.3, 1.0))

        assert buffer.sample_count == 5 * 3 * 4
        assert buffer.samples.shape == (3, 5, 4)
        assert buffer.size == (5, 3)

    def test_accepts_flat_samples(self):
        """Should reshape a flat row-major sample list."""
        flat = [0.0, 0.0, 0.0, 1.0, 1.0, 1.0, 1.0, 1.0]
        buffer = PixelBuffer(2, 1, flat)

        assert buffer.pixel(0, 0) == (0.0, 0.0, 0.0, 1.0)
        assert buffer.pixel(1, 0) == (1.0, 1.0, 1.0, 1.0)

    def test_rejects_wrong_sample_count(self):
        """Should reject sample arrays that do not match the dimensions."""
        with pytest.raises(InvalidParameterError):
            PixelBuffer(2, 2, [0.0] * 12)

    def test_rejects_non_positive_dimensions(self):
        """Should reject empty buffers."""
        with pytest.raises(InvalidParameterError):
            PixelBuffer(0, 2, [])

    def test_rejects_out_of_range_samples(self):
        """Should reject channel values outside [0, 1]."""
        with pytest.raises(InvalidParameterError):
            PixelBuffer.filled(1, 1, (1.5, 0.0, 0.0, 1.0))

        with pytest.raises(InvalidParameterError):
            PixelBuffer.filled(1, 1, (-0.1, 0.0, 0.0, 1.0))

    def test_invalid_parameter_is_value_error(self):
        """InvalidParameterError should be catchable as ValueError."""
        with pytest.raises(ValueError):
            PixelBuffer(1, 1, [0.0])


class TestPixelBufferImmutability:
    """Tests that buffers cannot be changed after construction."""

    def test_samples_are_read_only(self):
        """Writing into the sample array should fail."""
        buffer = PixelBuffer.filled(2, 2, (0.5, 0.5, 0.5, 1.0))

        with pytest.raises(ValueError):
            buffer.samples[0, 0, 0] = 0.0

    def test_source_array_is_copied(self):
        """Changing the array a buffer was built from should not affect it."""
        source = np.zeros((1, 1, 4))
        buffer = PixelBuffer(1, 1, source)

        source[0, 0, 0] = 1.0

        assert buffer.pixel(0, 0)[0] == 0.0

    def test_attributes_are_frozen(self):
        """Dimensions cannot be reassigned."""
        buffer = PixelBuffer.filled(1, 1, (0.0, 0.0, 0.0, 1.0))

        with pytest.raises(AttributeError):
            buffer.width = 10


class TestPixelBufferEquality:
    """Tests for value equality."""

    def test_equal_content_is_equal(self):
        a = PixelBuffer.filled(2, 2, (0.25, 0.5, 0.75, 1.0))
        b = PixelBuffer.filled(2, 2, (0.25, 0.5, 0.75, 1.0))

        assert a == b

    def test_different_dimensions_not_equal(self):
        a = PixelBuffer.filled(2, 1, (0.0, 0.0, 0.0, 1.0))
        b = PixelBuffer.filled(1, 2, (0.0, 0.0, 0.0, 1.0))

        assert a != b

    def test_different_pixels_not_equal(self):
        a = PixelBuffer.filled(1, 1, (0.0, 0.0, 0.0, 1.0))
        b = PixelBuffer.filled(1, 1, (0.0, 0.0, 0.0, 0.5))

        assert a != b


class TestPixelBufferAccess:
    """Tests for pixel lookup."""

    def test_pixel_is_row_major(self, gradient_buffer):
        """pixel(x, y) should read column x of row y."""
        r, g, b, a = gradient_buffer.pixel(3, 1)

        assert r == pytest.approx(1.0)
        assert g == pytest.approx(0.5)

    def test_pixel_out_of_bounds(self, gradient_buffer):
        with pytest.raises(InvalidParameterError):
            gradient_buffer.pixel(4, 0)


class TestPixelBufferImageConversion:
    """Tests for PIL Image round trips."""

    def test_from_image_scales_to_unit_range(self):
        """8-bit values should map to value / 255."""
        img = Image.new("RGBA", (2, 2), (255, 0, 51, 255))

        buffer = PixelBuffer.from_image(img)

        assert buffer.size == (2, 2)
        assert buffer.pixel(1, 1) == pytest.approx((1.0, 0.0, 0.2, 1.0))

    def test_from_rgb_image_is_opaque(self):
        """Images without alpha should load fully opaque."""
        img = Image.new("RGB", (3, 1), (10, 20, 30))

        buffer = PixelBuffer.from_image(img)

        assert buffer.pixel(2, 0)[3] == 1.0

    def test_from_16bit_gray_image_is_scaled(self):
        """16-bit samples map to value / 65535 instead of saturating."""
        img = Image.fromarray(np.full((3, 4), 30000, dtype=np.uint16))

        buffer = PixelBuffer.from_image(img)

        assert buffer.size == (4, 3)
        gray = 30000 / 65535.0
        assert buffer.pixel(3, 2) == pytest.approx((gray, gray, gray, 1.0))

    def test_to_image_restores_8bit_values(self):
        """Converting back should reproduce the original 8-bit pixels."""
        img = Image.new("RGBA", (3, 2), (12, 128, 200, 77))

        result = PixelBuffer.from_image(img).to_image()

        assert result.mode == "RGBA"
        assert result.size == (3, 2)
        assert result.getpixel((2, 1)) == (12, 128, 200, 77)

    def test_to_colors_row_major(self):
        buffer = PixelBuffer.from_pixels(2, 1, [(1.0, 0.0, 0.0, 1.0), (0.0, 0.0, 1.0, 1.0)])

        assert buffer.to_colors() == [(255, 0, 0, 255), (0, 0, 255, 255)]

    def test_from_image_rejects_non_images(self):
        with pytest.raises(TypeError):
            PixelBuffer.from_image("not an image")


class TestCropRect:
    """Tests for CropRect helpers."""

    def test_from_points_normalizes_drag_direction(self):
        """Dragging up-left should produce the same rect as down-right."""
        forward = CropRect.from_points((10, 20), (50, 80))
        backward = CropRect.from_points((50, 80), (10, 20))

        assert forward == backward == CropRect(10, 20, 40, 60)

    def test_from_points_truncates_fractions(self):
        rect = CropRect.from_points((1.7, 2.2), (5.9, 9.9))

        assert (rect.x, rect.y) == (1, 2)

    def test_box(self):
        assert CropRect(1, 2, 3, 4).box == (1, 2, 4, 6)

    def test_fits_within(self):
        rect = CropRect(0, 0, 4, 3)

        assert rect.fits_within(4, 3)
        assert not rect.fits_within(3, 3)

    def test_empty_rect_does_not_fit(self):
        assert not CropRect(0, 0, 0, 2).fits_within(4, 4)

    def test_negative_origin_does_not_fit(self):
        assert not CropRect(-1, 0, 2, 2).fits_within(4, 4)
