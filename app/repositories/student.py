"""Student repository for the paging chapter.

A standalone tutorial piece: no API route uses it, only its tests do.
The post listing shares its ``PageRequest`` normalization.
"""
from typing import Iterable, List

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.models.student import Student
from app.repositories.base import Page
from app.schemas.page import PageRequest


class StudentRepository:
    def __init__(self, session: Session):
        self.session = session

    def save_all(self, students: Iterable[Student]) -> List[Student]:
        students = list(students)
        self.session.add_all(students)
        self.session.flush()
        return students

    def find_page(self, page_request: PageRequest) -> Page[Student]:
        total = self.session.scalar(select(func.count()).select_from(Student))
        items = []
        if page_request.offset < total:
            stmt = select(Student).order_by(Student.id).offset(page_request.offset).limit(page_request.size)
            items = list(self.session.scalars(stmt))
        return Page(
            items=items,
            total=total,
            page=page_request.page,
            size=page_request.size,
        )

    def find_by_name_containing(self, keyword: str) -> List[Student]:
        stmt = select(Student).where(Student.name.contains(keyword)).order_by(Student.id)
        return list(self.session.scalars(stmt))
