"""Inline mappings and fixtures for the generation tests."""

from __future__ import annotations

import pytest
from sqlalchemy import JSON, Column, ForeignKey, Integer, String, Table
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

from ddlgen.core.scanner import MappedTypeDescriptor, TypeKind


class Base(DeclarativeBase):
    pass


class Widget(Base):
    __tablename__ = "widgets"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(50), index=True)


class Part(Base):
    __tablename__ = "parts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    widget_id: Mapped[int] = mapped_column(ForeignKey("widgets.id"))
    code: Mapped[str] = mapped_column(String(10), unique=True, default="X")


class Document(Base):
    __tablename__ = "documents"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    body: Mapped[dict] = mapped_column(JSON)


class Ledger(Base):
    __tablename__ = "ledgers"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    rev: Mapped[int] = mapped_column(Integer)


student_courses = Table(
    "student_courses",
    Base.metadata,
    Column("student_id", ForeignKey("students.id"), nullable=False),
    Column("course_id", ForeignKey("courses.id"), nullable=False),
)


class Course(Base):
    __tablename__ = "courses"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    title: Mapped[str] = mapped_column(String(80))


class Student(Base):
    __tablename__ = "students"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    courses: Mapped[list[Course]] = relationship(secondary=student_courses)


class Department(Base):
    __tablename__ = "departments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    head_id: Mapped[int | None] = mapped_column(ForeignKey("employees.id"))


class Employee(Base):
    __tablename__ = "employees"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    department_id: Mapped[int] = mapped_column(ForeignKey("departments.id"))


def entity(cls: type) -> MappedTypeDescriptor:
    return MappedTypeDescriptor.of(cls, TypeKind.ENTITY, cls.__module__)


@pytest.fixture
def widget():
    return entity(Widget)


@pytest.fixture
def part():
    return entity(Part)


@pytest.fixture
def document():
    return entity(Document)


@pytest.fixture
def ledger():
    return entity(Ledger)


@pytest.fixture
def sample_types(sample_app):
    """Person, Company and Address from the sample application."""
    from ddlgen.core.scanner import scan

    return scan(["pkg.entities"], [sample_app])


@pytest.fixture
def course():
    return entity(Course)


@pytest.fixture
def student():
    return entity(Student)


@pytest.fixture
def department():
    return entity(Department)


@pytest.fixture
def employee():
    return entity(Employee)
