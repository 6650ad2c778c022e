"""Tests for the landing page and tournament queries."""

from __future__ import annotations

import datetime

from olympiad.tournament import TournamentService
from tests.conftest import FirestoreTestCase

BASE_DATE = datetime.datetime(2024, 1, 1, tzinfo=datetime.timezone.utc)
DAY = datetime.timedelta(days=1)


class LandingPageTestCase(FirestoreTestCase):
    """Test case for the main blueprint."""

    def setUp(self) -> None:
        super().setUp()
        tournaments = self.mock_db.collection("tournaments")
        for i in range(4):
            tournaments.document(f"t{i}").set(
                {
                    "name": f"Olympiad {i}",
                    "description": f"Round {i}",
                    "date": BASE_DATE + i * 30 * DAY,
                    "registration_deadline": BASE_DATE + (i * 30 - 10) * DAY,
                    "format": "online" if i % 2 else "offline",
                    "max_participants": 100,
                    "is_active": True,
                }
            )
        tournaments.document("hidden").set(
            {
                "name": "Hidden Olympiad",
                "date": BASE_DATE + 365 * DAY,
                "registration_deadline": BASE_DATE + 300 * DAY,
                "format": "online",
                "max_participants": 10,
                "is_active": False,
            }
        )

        profiles = self.mock_db.collection("profiles")
        names = [("Anna", "Petrova"), ("Ivan", "Sidorov"), ("Maria", "Volkova"), ("Oleg", "Orlov")]
        for idx, (first, last) in enumerate(names):
            profiles.document(f"p{idx}").set({"first_name": first, "last_name": last})

        results = self.mock_db.collection("tournament_results")
        # Stored out of order to check sorting by place
        for place, profile_id, score in [(3, "p2", 80), (1, "p0", 98), (4, "p3", 70), (2, "p1", 91)]:
            results.add(
                {
                    "tournament_id": "t3",
                    "profile_id": profile_id,
                    "place": place,
                    "score": score,
                }
            )

    def test_recent_tournaments_are_limited_and_newest_first(self) -> None:
        tournaments = TournamentService.get_recent_tournaments(self.mock_db)
        self.assertEqual([t["id"] for t in tournaments], ["t3", "t2", "t1"])

    def test_top_participants_sorted_by_place(self) -> None:
        top = TournamentService.get_top_participants(self.mock_db, "t3")
        self.assertEqual(
            top,
            [
                {"name": "Anna Petrova", "place": 1, "score": 98},
                {"name": "Ivan Sidorov", "place": 2, "score": 91},
                {"name": "Maria Volkova", "place": 3, "score": 80},
            ],
        )

    def test_results_without_place_come_last(self) -> None:
        results = self.mock_db.collection("tournament_results")
        results.add({"tournament_id": "t2", "profile_id": "p3", "score": 50})
        results.add({"tournament_id": "t2", "profile_id": "p0", "place": 1, "score": 99})
        top = TournamentService.get_top_participants(self.mock_db, "t2")
        self.assertEqual([p["place"] for p in top], [1, None])
        self.assertEqual(top[0]["name"], "Anna Petrova")

    def test_top_participants_empty_without_results(self) -> None:
        self.assertEqual(TournamentService.get_top_participants(self.mock_db, "t0"), [])

    def test_get_tournament(self) -> None:
        self.assertEqual(
            TournamentService.get_tournament(self.mock_db, "t1")["name"], "Olympiad 1"
        )
        self.assertIsNone(TournamentService.get_tournament(self.mock_db, "nope"))

    def test_index_renders_recent_tournaments(self) -> None:
        response = self.client.get("/")
        self.assertEqual(response.status_code, 200)
        html = response.data.decode()
        self.assertIn("Kazan Mathematical Olympiads", html)
        self.assertIn("Olympiad 3", html)
        self.assertNotIn("Olympiad 0", html)
        self.assertNotIn("Hidden Olympiad", html)
        self.assertIn("Anna Petrova", html)
        self.assertNotIn("Oleg Orlov", html)
        self.assertNotIn("Demo mode", html)

    def test_index_falls_back_to_demo_data_on_error(self) -> None:
        self.mock_firestore_module.client.side_effect = RuntimeError("unavailable")
        with self.assertLogs(self.app.logger, level="ERROR"):
            response = self.client.get("/")
        self.assertEqual(response.status_code, 200)
        self.assertIn(b"Autumn Mathematics Cup", response.data)

    def test_tournament_list_shows_all_active(self) -> None:
        response = self.client.get("/tournaments")
        html = response.data.decode()
        for i in range(4):
            self.assertIn(f"Olympiad {i}", html)
        self.assertNotIn("Hidden Olympiad", html)
        self.assertIn("In person", html)
        self.assertIn("01.01.2024", html)


class DemoLandingPageTestCase(FirestoreTestCase):
    """Landing page behavior in demo mode."""

    app_config = {"DEMO_MODE": True}

    def test_index_shows_demo_tournaments(self) -> None:
        response = self.client.get("/")
        self.assertEqual(response.status_code, 200)
        self.assertIn(b"Demo mode", response.data)
        self.assertIn(b"Spring Open Olympiad", response.data)
        self.assertIn(b"Anna Petrova", response.data)
        self.mock_firestore_module.client.assert_not_called()
