from __future__ import annotations

import logging

import flet as ft

from cgpacalc.domain.logic.grading import GRADE_SCALE, VALID_GRADES, classify_cgpa
from cgpacalc.domain.logic.reports import SemesterReport
from cgpacalc.state.app_state import AppState, CourseInput, app_state, parse_credit_hours

logger = logging.getLogger(__name__)

TABLE_COLUMNS = ["Course Code", "Course Name", "Credits", "Grade", "Grade Points"]


def _course_table(report: SemesterReport) -> ft.DataTable:
    return ft.DataTable(
        columns=[ft.DataColumn(ft.Text(c)) for c in TABLE_COLUMNS],
        rows=[
            ft.DataRow(
                cells=[
                    ft.DataCell(ft.Text(r.code)),
                    ft.DataCell(ft.Text(r.name)),
                    ft.DataCell(ft.Text(str(r.credit_hours))),
                    ft.DataCell(ft.Text(r.grade)),
                    ft.DataCell(ft.Text(f"{r.grade_point:.2f}")),
                ]
            )
            for r in report.rows
        ],
    )


def _semester_block(report: SemesterReport) -> ft.Control:
    return ft.Column(
        [
            ft.Text(f"Semester: {report.name}", size=18, weight=ft.FontWeight.BOLD),
            _course_table(report),
            ft.Text(f"Semester SGPA: {report.sgpa:.2f}"),
            ft.Text(f"Total Credits: {report.total_credits}"),
        ]
    )


class CourseRowInput:
    def __init__(self, index: int) -> None:
        self.code = ft.TextField(label=f"Code {index}", hint_text="CSE101", width=140)
        self.name = ft.TextField(label="Course Name", width=260)
        self.credits = ft.TextField(label="Credits", width=100, value="3")
        self.grade = ft.Dropdown(
            label="Grade",
            width=100,
            options=[ft.dropdown.Option(g) for g in VALID_GRADES],
            value="O",
        )

    def control(self) -> ft.Control:
        return ft.Row([self.code, self.name, self.credits, self.grade])

    def to_input(self) -> CourseInput:
        credits = parse_credit_hours(self.credits.value or "")
        if not (self.code.value or "").strip() or not (self.name.value or "").strip():
            raise ValueError("Course code and name are required")
        return CourseInput(
            code=self.code.value,
            name=self.name.value,
            credit_hours=credits,
            grade=self.grade.value or "",
        )


class CgpaCalculatorApp:
    def __init__(self, page: ft.Page, state: AppState = app_state) -> None:
        self.page = page
        self.page.title = "CGPA Calculator"
        self.page.scroll = ft.ScrollMode.AUTO
        self.state = state

    def run(self) -> None:
        if self.state.has_profile:
            self.show_main_app()
        else:
            self.show_profile_view()

    def show_profile_view(self) -> None:
        name = ft.TextField(label="Student Name", width=360)
        reg_no = ft.TextField(label="Register Number", width=360)
        program = ft.TextField(label="Program", hint_text="B.Tech CSE, MCA, etc.", width=360)
        dept = ft.TextField(label="Department", width=360)
        load_path = ft.TextField(label="Or load from file", hint_text="data/record.txt", width=360)
        error = ft.Text(color=ft.Colors.RED)

        def start(_: ft.ControlEvent) -> None:
            if not (name.value or "").strip():
                error.value = "Student name is required."
                self.page.update()
                return
            self.state.start_record(name.value, reg_no.value or "", program.value or "", dept.value or "")
            self.show_main_app()

        def load(_: ft.ControlEvent) -> None:
            ok, path = self.state.load(load_path.value)
            if not ok:
                error.value = f"Error opening {path} for reading."
                self.page.update()
                return
            self.show_main_app()

        self.page.clean()
        self.page.add(
            ft.Column(
                [
                    ft.Text("CGPA Calculator", size=32, weight=ft.FontWeight.BOLD),
                    name,
                    reg_no,
                    program,
                    dept,
                    ft.ElevatedButton("Start", on_click=start),
                    ft.Divider(),
                    load_path,
                    ft.OutlinedButton("Load Record", on_click=load),
                    error,
                ],
                tight=True,
                horizontal_alignment=ft.CrossAxisAlignment.CENTER,
            )
        )

    def show_main_app(self) -> None:
        self.page.clean()

        add_container = ft.Container()
        results_container = ft.Container()
        transcript_container = ft.Container()
        search_container = ft.Container()
        file_container = ft.Container()
        header = ft.Text(size=16)

        def refresh_all() -> None:
            record = self.state.record
            cgpa = record.calculate_cgpa()
            header.value = (
                f"{record.student_name} ({record.register_number}) | "
                f"CGPA {cgpa:.2f} | {classify_cgpa(cgpa)}"
            )
            add_container.content = self.add_semester_view(refresh_all)
            results_container.content = self.results_view()
            transcript_container.content = self.transcript_view()
            search_container.content = self.search_view()
            file_container.content = self.file_view(refresh_all)
            self.page.update()

        tabs = ft.Tabs(
            selected_index=0,
            tabs=[
                ft.Tab(text="Add Semester", content=add_container),
                ft.Tab(text="Results", content=results_container),
                ft.Tab(text="Transcript", content=transcript_container),
                ft.Tab(text="Search", content=search_container),
                ft.Tab(text="File", content=file_container),
                ft.Tab(text="Grade System", content=self.grade_system_view()),
            ],
            expand=1,
        )

        self.page.add(
            ft.Row(
                [
                    ft.Text("CGPA Calculator", size=28, weight=ft.FontWeight.BOLD),
                    ft.TextButton("New Student", on_click=lambda _: self.show_profile_view()),
                ],
                alignment=ft.MainAxisAlignment.SPACE_BETWEEN,
            ),
            header,
            tabs,
        )
        refresh_all()

    def add_semester_view(self, refresh_all) -> ft.Control:
        sem_name = ft.TextField(label="Semester Name", hint_text="Semester I", width=360)
        rows: list[CourseRowInput] = [CourseRowInput(1)]
        rows_column = ft.Column([rows[0].control()])
        status = ft.Text(color=ft.Colors.RED)

        def add_row(_: ft.ControlEvent) -> None:
            row = CourseRowInput(len(rows) + 1)
            rows.append(row)
            rows_column.controls.append(row.control())
            self.page.update()

        def save_semester(_: ft.ControlEvent) -> None:
            name = (sem_name.value or "").strip()
            if not name:
                status.value = "Semester name is required."
                self.page.update()
                return
            try:
                courses = [row.to_input() for row in rows]
            except ValueError as exc:
                status.value = f"Invalid course: {exc}"
                self.page.update()
                return
            semester = self.state.add_semester(name, courses)
            logger.info("Added semester %r with %d course(s)", semester.name, len(semester.courses))
            refresh_all()

        return ft.Column(
            [
                sem_name,
                rows_column,
                ft.Row(
                    [
                        ft.OutlinedButton("Add Course", on_click=add_row),
                        ft.ElevatedButton("Save Semester", on_click=save_semester),
                    ]
                ),
                status,
            ]
        )

    def results_view(self) -> ft.Control:
        names = self.state.record.get_semester_names()
        if not names:
            return ft.Text("No semesters available. Please add a semester first.")

        output = ft.Column()
        semester_dd = ft.Dropdown(
            label="Semester",
            width=360,
            options=[ft.dropdown.Option(n) for n in dict.fromkeys(names)],
        )

        def show(_: ft.ControlEvent) -> None:
            report = self.state.record.display_semester_results(semester_dd.value or "")
            output.controls = [_semester_block(report) if report else ft.Text("Semester not found!")]
            self.page.update()

        semester_dd.on_change = show
        return ft.Column([semester_dd, output])

    def transcript_view(self) -> ft.Control:
        transcript = self.state.record.display_transcript()
        return ft.Column(
            [
                ft.Text("ACADEMIC TRANSCRIPT", size=22, weight=ft.FontWeight.BOLD),
                ft.Text(f"Student Name: {transcript.student_name}"),
                ft.Text(f"Register Number: {transcript.register_number}"),
                ft.Text(f"Program: {transcript.program}"),
                ft.Text(f"Department: {transcript.department}"),
                ft.Divider(),
                *[_semester_block(s) for s in transcript.semesters],
                ft.Divider(),
                ft.Text(f"Cumulative GPA (CGPA): {transcript.cgpa:.2f}", size=18, weight=ft.FontWeight.BOLD),
            ]
        )

    def search_view(self) -> ft.Control:
        code = ft.TextField(label="Course Code", width=240)
        output = ft.Column()

        def search(_: ft.ControlEvent) -> None:
            query = (code.value or "").strip()
            matches = self.state.record.search_course(query)
            if not matches:
                output.controls = [ft.Text(f"Course with code {query} not found!")]
            else:
                output.controls = [
                    ft.Text(
                        f"{m.course.code}  {m.course.name}  {m.course.credit_hours} cr  "
                        f"{m.course.grade} ({m.course.grade_point:.2f})  [{m.semester_name}]"
                    )
                    for m in matches
                ]
            self.page.update()

        return ft.Column([ft.Row([code, ft.ElevatedButton("Search", on_click=search)]), output])

    def file_view(self, refresh_all) -> ft.Control:
        path = ft.TextField(label="File", hint_text="data/record.txt", width=360)
        status = ft.Text()

        def set_status(message: str, is_error: bool) -> None:
            status.value = message
            status.color = ft.Colors.RED if is_error else ft.Colors.GREEN

        def save(_: ft.ControlEvent) -> None:
            ok, target = self.state.save(path.value)
            if ok:
                set_status(f"Data saved to {target} successfully!", is_error=False)
            else:
                set_status(f"Error opening {target} for writing.", is_error=True)
            self.page.update()

        def load(_: ft.ControlEvent) -> None:
            ok, source = self.state.load(path.value)
            if ok:
                refresh_all()
                return
            set_status(f"Error opening {source} for reading.", is_error=True)
            self.page.update()

        return ft.Column(
            [
                path,
                ft.Row(
                    [
                        ft.ElevatedButton("Save", on_click=save),
                        ft.OutlinedButton("Load", on_click=load),
                    ]
                ),
                status,
            ]
        )

    def grade_system_view(self) -> ft.Control:
        return ft.Column(
            [ft.Text("Grade System", size=20, weight=ft.FontWeight.BOLD)]
            + [
                ft.Text(f"{letter:<2} - {description} ({points:g} points)")
                for letter, points, description in GRADE_SCALE
            ]
        )


def main(page: ft.Page) -> None:
    CgpaCalculatorApp(page).run()
