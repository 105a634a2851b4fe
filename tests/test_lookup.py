"""Tests for validated id lookups."""

import pytest

from ridedispatch.core.exceptions import InvalidIdError, NotFoundError
from ridedispatch.lookup import validate_id
from ridedispatch.models import Driver, Passenger, Trip

BAD_IDS = [0, -1, "2", 2.0, None, True]


@pytest.mark.unit
class TestValidateId:
    """Tests for id validation."""

    def test_positive_int_returned(self):
        """A positive int is returned unchanged."""
        assert validate_id(7) == 7

    @pytest.mark.parametrize("bad_id", BAD_IDS)
    def test_rejects_non_positive_or_non_int(self, bad_id):
        """Non-positive and non-int ids are rejected."""
        with pytest.raises(InvalidIdError) as exc_info:
            validate_id(bad_id, "driver")
        assert exc_info.value.details == {"kind": "driver", "id": bad_id}
        assert "Driver id" in exc_info.value.message


@pytest.mark.unit
class TestFindPassenger:
    """Tests for passenger lookup."""

    @pytest.mark.parametrize("passenger_id", range(1, 9))
    def test_finds_every_passenger(self, dispatcher, passenger_id):
        """Every loaded passenger can be found by id."""
        passenger = dispatcher.find_passenger(passenger_id)
        assert isinstance(passenger, Passenger)
        assert passenger.id == passenger_id

    def test_loads_names_in_order(self, dispatcher):
        """Names come back as loaded."""
        assert dispatcher.passengers[0].name == "Passenger 1"
        assert dispatcher.passengers[-1].id == 8

    @pytest.mark.parametrize("bad_id", BAD_IDS)
    def test_invalid_id(self, dispatcher, bad_id):
        """Invalid ids raise InvalidIdError."""
        with pytest.raises(InvalidIdError):
            dispatcher.find_passenger(bad_id)

    def test_unknown_id(self, dispatcher):
        """Unknown ids raise NotFoundError naming the passenger."""
        with pytest.raises(NotFoundError) as exc_info:
            dispatcher.find_passenger(99)
        assert exc_info.value.details == {"passenger_id": 99}


@pytest.mark.unit
class TestFindDriver:
    """Tests for driver lookup."""

    @pytest.mark.parametrize("driver_id", range(1, 9))
    def test_finds_every_driver(self, dispatcher, driver_id):
        """Every loaded driver can be found by id."""
        driver = dispatcher.find_driver(driver_id)
        assert isinstance(driver, Driver)
        assert driver.id == driver_id

    @pytest.mark.parametrize("bad_id", BAD_IDS)
    def test_invalid_id(self, dispatcher, bad_id):
        """Invalid ids raise InvalidIdError."""
        with pytest.raises(InvalidIdError):
            dispatcher.find_driver(bad_id)

    def test_unknown_id(self, dispatcher):
        """Unknown ids raise NotFoundError naming the driver."""
        with pytest.raises(NotFoundError):
            dispatcher.find_driver(42)


@pytest.mark.unit
class TestFindTrip:
    """Tests for trip lookup."""

    def test_finds_loaded_trip(self, dispatcher):
        """Loaded trips can be found by id."""
        trip = dispatcher.find_trip(4)
        assert isinstance(trip, Trip)
        assert trip.driver_id == 6

    def test_finds_dispatched_trip(self, dispatcher):
        """Trips created by dispatch can be found too."""
        trip = dispatcher.request_trip(7)
        assert dispatcher.find_trip(trip.id) is trip

    def test_unknown_id(self, dispatcher):
        """Unknown ids raise NotFoundError."""
        with pytest.raises(NotFoundError):
            dispatcher.find_trip(9)

    def test_invalid_id(self, dispatcher):
        """Invalid ids raise InvalidIdError."""
        with pytest.raises(InvalidIdError):
            dispatcher.find_trip(0)

    def test_first_match_in_store_order(self, make_dispatcher):
        """Duplicate ids resolve to the first entity loaded."""
        dispatcher = make_dispatcher(
            passengers=[(1, "First"), (1, "Duplicate")],
            drivers=[(1, "Driver", "VIN", "AVAILABLE")],
            trips=[],
        )
        assert dispatcher.find_passenger(1).name == "First"
