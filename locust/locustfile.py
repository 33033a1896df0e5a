"""
Locust Load Test Suite

Run scenarios:
  locust -f locust/locustfile.py --tags concurrency  # Test double booking
  locust -f locust/locustfile.py --tags throughput   # Test listing cache
  locust -f locust/locustfile.py --tags edge         # Test bad input
  locust -f locust/locustfile.py                     # All tests
"""

import random
from locust import HttpUser, task, between, tag

# Shared state
TRIP_IDS = []
CONCURRENCY_TRIP_ID = None
CONCURRENCY_TRIP_SEATS = 20

CITIES = ["İstanbul", "Ankara", "İzmir", "Antalya", "Bursa", "Çanakkale", "Eskişehir"]
COMPANIES = ["Metro Turizm", "Kamil Koç", "Pamukkale", "THY", "Pegasus"]


def random_user_headers():
    return {"X-User-Id": str(random.randint(1, 1_000_000))}


def random_bus_trip(seats=None):
    departure, destination = random.sample(CITIES, 2)
    return {
        "type": "BUS",
        "company_name": random.choice(COMPANIES),
        "departure": departure,
        "destination": destination,
        "date": f"2025-0{random.randint(1, 9)}-{random.randint(10, 28)}",
        "time": f"{random.randint(0, 23):02d}:00",
        "arrival_time": f"{random.randint(0, 23):02d}:30",
        "price": float(random.randint(300, 1500)),
        "total_seats": seats or random.randint(20, 50),
    }


class ConcurrencyUser(HttpUser):
    """
    TEST 1: Concurrency - 100 users → 20 seats of one bus

    Run: locust -f locust/locustfile.py --tags concurrency -u 100 -r 50 --run-time 30s

    After test, verify every seat appears in at most one ACTIVE reservation:
      GET /api/v1/trips/{id}/seats  -> RESERVED count equals seats sold
    """
    wait_time = between(0, 0.1)

    def on_start(self):
        self.headers = random_user_headers()
        if not CONCURRENCY_TRIP_ID:
            resp = self.client.post("/api/v1/trips/", json=random_bus_trip(CONCURRENCY_TRIP_SEATS))
            if resp.status_code == 201:
                globals()["CONCURRENCY_TRIP_ID"] = resp.json()["id"]
                print(f"\n✓ Created trip {CONCURRENCY_TRIP_ID} with {CONCURRENCY_TRIP_SEATS} seats\n")

    @tag("concurrency")
    @task
    def reserve_contested_seats(self):
        """All users fight for the same 20 seats, two at a time."""
        if not CONCURRENCY_TRIP_ID:
            return

        seats = random.sample(range(1, CONCURRENCY_TRIP_SEATS + 1), 2)
        with self.client.post("/api/v1/reservations/",
            json={"trip_id": CONCURRENCY_TRIP_ID, "seat_numbers": seats},
            headers=self.headers,
            catch_response=True
        ) as resp:
            if resp.status_code == 201:
                resp.success()
            elif resp.status_code == 409:
                resp.success()  # Expected: seat taken or contention
            else:
                resp.failure(f"Unexpected: {resp.status_code}")


class ThroughputUser(HttpUser):
    """
    TEST 2: Throughput - Listing cache effectiveness

    Run twice:
      1. With REDIS_ENABLED=true
      2. With REDIS_ENABLED=false

    Compare avg response time, requests/sec, P95/P99 latency.
    """
    wait_time = between(0.1, 0.5)

    @tag("throughput", "read")
    @task(10)
    def list_trips_cached(self):
        city = random.choice(CITIES)
        self.client.get(f"/api/v1/trips/?q={city}", name="/api/v1/trips/?q= [cached]")

    @tag("throughput", "read")
    @task(3)
    def facets(self):
        self.client.get("/api/v1/trips/facets")

    @tag("throughput", "read")
    @task(3)
    def seat_map(self):
        if TRIP_IDS:
            trip_id = random.choice(TRIP_IDS)
            self.client.get(f"/api/v1/trips/{trip_id}/seats", name="/api/v1/trips/{id}/seats")

    @tag("throughput")
    @task(1)
    def health_check(self):
        self.client.get("/health")


class EdgeCaseUser(HttpUser):
    """
    TEST 3: Edge cases - Bad input handling

    Run: locust -f locust/locustfile.py --tags edge -u 20 -r 5 --run-time 30s

    System should NOT crash, return proper error codes.
    """
    wait_time = between(0.5, 1.5)

    def on_start(self):
        self.headers = random_user_headers()

    def _expect(self, resp, codes):
        if resp.status_code in codes:
            resp.success()
        else:
            resp.failure(f"Expected {codes}, got {resp.status_code}")

    @tag("edge")
    @task
    def invalid_trip_id(self):
        with self.client.post("/api/v1/reservations/",
            json={"trip_id": 999999, "seat_numbers": [1]},
            headers=self.headers,
            catch_response=True
        ) as resp:
            self._expect(resp, [404])

    @tag("edge")
    @task
    def no_seats(self):
        with self.client.post("/api/v1/reservations/",
            json={"trip_id": 1, "seat_numbers": []},
            headers=self.headers,
            catch_response=True
        ) as resp:
            self._expect(resp, [400, 404])

    @tag("edge")
    @task
    def seat_out_of_range(self):
        with self.client.post("/api/v1/reservations/",
            json={"trip_id": 1, "seat_numbers": [999999]},
            headers=self.headers,
            catch_response=True
        ) as resp:
            self._expect(resp, [400, 404, 409])

    @tag("edge")
    @task
    def bus_with_too_many_seats(self):
        with self.client.post("/api/v1/trips/",
            json=dict(random_bus_trip(), total_seats=51),
            catch_response=True
        ) as resp:
            self._expect(resp, [400])

    @tag("edge")
    @task
    def malformed_json(self):
        with self.client.post("/api/v1/reservations/",
            data="not json at all",
            headers=self.headers,
            catch_response=True
        ) as resp:
            self._expect(resp, [400, 422])

    @tag("edge")
    @task
    def missing_user(self):
        with self.client.post("/api/v1/reservations/",
            json={"trip_id": 1, "seat_numbers": [1]},
            catch_response=True
        ) as resp:
            self._expect(resp, [401])


class RealisticUser(HttpUser):
    """
    TEST 4: Realistic mixed workload

    Run: locust -f locust/locustfile.py -u 200 -r 20 --run-time 120s

    Mostly browsing and seat maps, some reservations, rare trip creation.
    """
    wait_time = between(1, 3)

    def on_start(self):
        self.headers = random_user_headers()

    @task(50)
    def browse_trips(self):
        resp = self.client.get("/api/v1/trips/")
        if resp.status_code == 200:
            for trip in resp.json().get("trips", []):
                if trip["id"] not in TRIP_IDS:
                    TRIP_IDS.append(trip["id"])

    @task(20)
    def view_seat_map(self):
        if TRIP_IDS:
            self.client.get(f"/api/v1/trips/{random.choice(TRIP_IDS)}/seats",
                name="/api/v1/trips/{id}/seats")

    @task(10)
    def reserve_available_seats(self):
        if not TRIP_IDS:
            return
        trip_id = random.choice(TRIP_IDS)
        resp = self.client.get(f"/api/v1/trips/{trip_id}/seats", name="/api/v1/trips/{id}/seats")
        if resp.status_code != 200:
            return
        available = [s["number"] for s in resp.json()["seats"] if s["state"] == "AVAILABLE"]
        if available:
            seats = random.sample(available, min(len(available), random.randint(1, 3)))
            self.client.post("/api/v1/reservations/",
                json={"trip_id": trip_id, "seat_numbers": seats},
                headers=self.headers)

    @task(3)
    def create_trip(self):
        resp = self.client.post("/api/v1/trips/", json=random_bus_trip())
        if resp.status_code == 201:
            TRIP_IDS.append(resp.json()["id"])
