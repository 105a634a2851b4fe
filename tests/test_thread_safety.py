"""Thread safety tests for concurrent trip requests.

Race conditions are probabilistic. These tests use several runs with many
threads to raise the likelihood of exposing a missing lock.
"""

from concurrent.futures import ThreadPoolExecutor, as_completed

import pytest

from ridedispatch.core.exceptions import NoDriverAvailableError
from ridedispatch.dispatcher import TripDispatcher
from tests.sample_data import fixed_clock

STRESS_ITERATIONS = 5
NUM_DRIVERS = 50
NUM_THREADS = 20


def build_large_dispatcher() -> TripDispatcher:
    """Registry with many never-driven drivers and passengers."""
    passengers = [(i, f"Passenger {i}") for i in range(1, 101)]
    drivers = [(i, f"Driver {i}", f"VIN{i:014d}", "AVAILABLE") for i in range(1, NUM_DRIVERS + 1)]
    return TripDispatcher(passengers, drivers, [], clock=fixed_clock)


@pytest.mark.concurrency
class TestConcurrentRequests:
    """Tests for requests issued from a thread pool."""

    def test_no_driver_assigned_twice(self):
        """Concurrent requests never share a driver."""
        for _ in range(STRESS_ITERATIONS):
            dispatcher = build_large_dispatcher()

            def request(passenger_id: int, d: TripDispatcher = dispatcher):
                try:
                    return d.request_trip(passenger_id)
                except NoDriverAvailableError:
                    return None

            with ThreadPoolExecutor(max_workers=NUM_THREADS) as executor:
                futures = [executor.submit(request, i) for i in range(1, 81)]
                results = [future.result() for future in as_completed(futures)]

            trips = [trip for trip in results if trip is not None]
            assert len(trips) == NUM_DRIVERS
            assert results.count(None) == 80 - NUM_DRIVERS
            assert len({trip.driver_id for trip in trips}) == NUM_DRIVERS

    def test_trip_ids_unique_and_dense(self):
        """Concurrent requests mint unique consecutive trip ids."""
        for _ in range(STRESS_ITERATIONS):
            dispatcher = build_large_dispatcher()

            with ThreadPoolExecutor(max_workers=NUM_THREADS) as executor:
                futures = [executor.submit(dispatcher.request_trip, i) for i in range(1, 41)]
                trips = [future.result() for future in as_completed(futures)]

            assert sorted(trip.id for trip in trips) == list(range(1, 41))
            assert [trip.id for trip in dispatcher.trips] == list(range(1, 41))
            for trip in trips:
                assert trip.driver.trips == [trip]
                assert trip.passenger.trips == [trip]
