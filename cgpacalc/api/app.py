from typing import Dict, List, Optional

import uvicorn
from fastapi import FastAPI, HTTPException, status
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from cgpacalc.config.settings import configure_logging, settings
from cgpacalc.domain.logic.grading import GRADE_SCALE, classify_cgpa
from cgpacalc.domain.logic.reports import SemesterReport
from cgpacalc.state.app_state import AppState, CourseInput, app_state


class ProfilePayload(BaseModel):
    student_name: str = Field(min_length=1)
    register_number: str = ""
    program: str = ""
    department: str = ""


class CoursePayload(BaseModel):
    code: str = Field(min_length=1)
    name: str = Field(min_length=1)
    credit_hours: int = Field(ge=1)
    grade: str


class SemesterPayload(BaseModel):
    name: str = Field(min_length=1)
    courses: List[CoursePayload] = Field(min_length=1)


class FilePayload(BaseModel):
    path: Optional[str] = None


def _report_to_dict(report: SemesterReport) -> Dict:
    return {
        "name": report.name,
        "courses": [
            {
                "code": row.code,
                "name": row.name,
                "credit_hours": row.credit_hours,
                "grade": row.grade,
                "grade_point": row.grade_point,
            }
            for row in report.rows
        ],
        "sgpa": report.sgpa,
        "total_credits": report.total_credits,
    }


def create_app(state: AppState = app_state) -> FastAPI:
    app = FastAPI(title="CGPA Calculator API", version="1.0.0")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_allowed_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    def health() -> Dict[str, str]:
        return {"status": "ok"}

    @app.get("/record")
    def get_record() -> Dict:
        record = state.record
        cgpa = record.calculate_cgpa()
        return {
            "student_name": record.student_name,
            "register_number": record.register_number,
            "program": record.program,
            "department": record.department,
            "semesters": record.get_semester_names(),
            "cgpa": cgpa,
            "classification": classify_cgpa(cgpa),
        }

    @app.put("/record/profile")
    def set_profile(payload: ProfilePayload) -> Dict[str, str]:
        state.start_record(**payload.model_dump())
        return {"status": "created"}

    @app.get("/semesters")
    def list_semesters() -> List[str]:
        return state.record.get_semester_names()

    @app.post("/semesters", status_code=status.HTTP_201_CREATED)
    def add_semester(payload: SemesterPayload) -> Dict:
        semester = state.add_semester(
            payload.name,
            [CourseInput(**course.model_dump()) for course in payload.courses],
        )
        return {
            "name": semester.name,
            "courses": len(semester.courses),
            "sgpa": semester.calculate_sgpa(),
        }

    @app.get("/semesters/{name}")
    def get_semester(name: str) -> Dict:
        report = state.record.display_semester_results(name)
        if report is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Semester {name!r} not found")
        return _report_to_dict(report)

    @app.get("/transcript")
    def get_transcript() -> Dict:
        transcript = state.record.display_transcript()
        return {
            "student_name": transcript.student_name,
            "register_number": transcript.register_number,
            "program": transcript.program,
            "department": transcript.department,
            "semesters": [_report_to_dict(s) for s in transcript.semesters],
            "cgpa": transcript.cgpa,
        }

    @app.get("/courses/{code}")
    def search_course(code: str) -> List[Dict]:
        return [
            {
                "code": match.course.code,
                "name": match.course.name,
                "credit_hours": match.course.credit_hours,
                "grade": match.course.grade,
                "grade_point": match.course.grade_point,
                "semester": match.semester_name,
            }
            for match in state.record.search_course(code)
        ]

    @app.get("/grades")
    def grade_scale() -> List[Dict]:
        return [
            {"grade": letter, "points": points, "description": description}
            for letter, points, description in GRADE_SCALE
        ]

    @app.post("/record/save")
    def save_record(payload: FilePayload) -> Dict[str, str]:
        ok, path = state.save(payload.path)
        if not ok:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Could not write {path}")
        return {"status": "saved", "path": str(path)}

    @app.post("/record/load")
    def load_record(payload: FilePayload) -> Dict[str, str]:
        ok, path = state.load(payload.path)
        if not ok:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Could not read {path}")
        return {"status": "loaded", "path": str(path)}

    return app


app = create_app()


def run() -> None:
    configure_logging()
    uvicorn.run("cgpacalc.api.app:app", host=settings.api_host, port=settings.api_port)
