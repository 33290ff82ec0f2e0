"""Tests for location models."""

import pytest

from wxcal.models.location import Coordinates


class TestCoordinates:
    """Tests for the Coordinates model."""

    def test_valid_coordinates(self):
        """Test creating valid coordinates."""
        coords = Coordinates(latitude=42.27, longitude=-83.74)
        assert coords.latitude == 42.27
        assert coords.longitude == -83.74

    def test_boundary_values(self):
        """Test boundary latitude/longitude values."""
        assert Coordinates(latitude=90, longitude=0).latitude == 90
        assert Coordinates(latitude=-90, longitude=0).latitude == -90
        assert Coordinates(latitude=0, longitude=180).longitude == 180
        assert Coordinates(latitude=0, longitude=-180).longitude == -180

    @pytest.mark.parametrize("latitude, longitude", [(91, 0), (-91, 0), (0, 181), (0, -181)])
    def test_out_of_range(self, latitude: float, longitude: float):
        """Test that out-of-range values raise an error."""
        with pytest.raises(ValueError):
            Coordinates(latitude=latitude, longitude=longitude)

    def test_str_uses_two_decimals(self):
        """Test the "lat,lon" form used in URLs and calendar ids."""
        assert str(Coordinates(latitude=42.2749, longitude=-83.7451)) == "42.27,-83.75"
        assert str(Coordinates(latitude=42, longitude=-83.7)) == "42.00,-83.70"

    def test_frozen(self):
        coords = Coordinates(latitude=42.27, longitude=-83.74)
        with pytest.raises(ValueError):
            coords.latitude = 0
