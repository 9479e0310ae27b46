import tempfile
import unittest
from pathlib import Path
from unittest import mock

from fastapi.testclient import TestClient

import cgpacalc.api.app as api_module
from cgpacalc.api.app import create_app
from cgpacalc.config.settings import settings
from cgpacalc.state.app_state import AppState

SEMESTER_ONE = {
    "name": "Semester I",
    "courses": [
        {"code": "CSE101", "name": "Data Structures", "credit_hours": 4, "grade": "o"},
        {"code": "MAT201", "name": "Calculus", "credit_hours": 3, "grade": "B+"},
    ],
}


class ApiTests(unittest.TestCase):
    def setUp(self):
        self.state = AppState()
        self.client = TestClient(create_app(self.state))
        res = self.client.put(
            "/record/profile",
            json={
                "student_name": "Asha",
                "register_number": "RA1",
                "program": "B.Tech CSE",
                "department": "Computing",
            },
        )
        self.assertEqual(res.status_code, 200)

    def test_health(self):
        self.assertEqual(self.client.get("/health").json(), {"status": "ok"})

    def test_add_semester_and_report(self):
        res = self.client.post("/semesters", json=SEMESTER_ONE)
        self.assertEqual(res.status_code, 201)
        self.assertAlmostEqual(res.json()["sgpa"], 61 / 7)

        report = self.client.get("/semesters/Semester I").json()
        self.assertEqual(report["total_credits"], 7)
        self.assertEqual([c["grade"] for c in report["courses"]], ["O", "B+"])
        self.assertEqual(report["courses"][0]["grade_point"], 10.0)

    def test_unknown_semester_is_404(self):
        self.assertEqual(self.client.get("/semesters/Semester IX").status_code, 404)

    def test_invalid_grade_is_coerced(self):
        body = {"name": "S", "courses": [{"code": "X1", "name": "X", "credit_hours": 2, "grade": "Z"}]}
        self.client.post("/semesters", json=body)
        self.assertEqual(self.state.record.semesters[0].courses[0].grade, "F")

    def test_non_positive_credits_rejected(self):
        body = {"name": "S", "courses": [{"code": "X1", "name": "X", "credit_hours": 0, "grade": "O"}]}
        self.assertEqual(self.client.post("/semesters", json=body).status_code, 422)
        self.assertEqual(self.state.record.semesters, [])

    def test_record_summary(self):
        self.client.post("/semesters", json=SEMESTER_ONE)
        body = self.client.get("/record").json()
        self.assertEqual(body["semesters"], ["Semester I"])
        self.assertEqual(body["classification"], "First Class")
        self.assertEqual(self.client.get("/semesters").json(), ["Semester I"])

    def test_search_and_transcript(self):
        self.client.post("/semesters", json=SEMESTER_ONE)
        self.client.post("/semesters", json=SEMESTER_ONE)
        matches = self.client.get("/courses/CSE101").json()
        self.assertEqual(len(matches), 2)
        self.assertEqual(self.client.get("/courses/NOPE").json(), [])

        transcript = self.client.get("/transcript").json()
        self.assertEqual(len(transcript["semesters"]), 2)
        self.assertAlmostEqual(transcript["cgpa"], 61 / 7)

    def test_grade_scale(self):
        grades = self.client.get("/grades").json()
        self.assertEqual(grades[0], {"grade": "O", "points": 10.0, "description": "Outstanding"})
        self.assertEqual(len(grades), 8)

    def test_save_and_load(self):
        self.client.post("/semesters", json=SEMESTER_ONE)
        with tempfile.TemporaryDirectory() as tmp:
            path = str(Path(tmp) / "record.txt")
            self.assertEqual(self.client.post("/record/save", json={"path": path}).status_code, 200)

            self.client.put("/record/profile", json={"student_name": "Other"})
            self.assertEqual(self.client.get("/semesters").json(), [])

            self.assertEqual(self.client.post("/record/load", json={"path": path}).status_code, 200)
            self.assertEqual(self.client.get("/record").json()["student_name"], "Asha")
            self.assertEqual(self.client.get("/semesters").json(), ["Semester I"])

            missing = str(Path(tmp) / "missing.txt")
            self.assertEqual(self.client.post("/record/load", json={"path": missing}).status_code, 400)


class RunTests(unittest.TestCase):
    def test_run_uses_configured_host_and_port(self):
        with mock.patch.object(api_module.uvicorn, "run") as run, mock.patch.object(api_module, "configure_logging"):
            api_module.run()
        run.assert_called_once_with("cgpacalc.api.app:app", host=settings.api_host, port=settings.api_port)


if __name__ == "__main__":
    unittest.main()
