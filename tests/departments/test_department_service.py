from __future__ import annotations

from datetime import date

import pytest

from src.hr_timeclock.hr_timeclock.core.enums import EmployeeStatus
from src.hr_timeclock.hr_timeclock.core.exceptions import NotFoundError, ValidationError
from src.hr_timeclock.hr_timeclock.departments.memory_repository import InMemoryDepartmentStore
from src.hr_timeclock.hr_timeclock.departments.model import department_to_dict
from src.hr_timeclock.hr_timeclock.departments.service import DepartmentService
from src.hr_timeclock.hr_timeclock.employees.memory_repository import InMemoryEmployeeStore
from src.hr_timeclock.hr_timeclock.employees.model import Employee


def _employee(first_name: str, department: str, status: EmployeeStatus = EmployeeStatus.ACTIVE) -> Employee:
    return Employee(
        employee_id=None,
        first_name=first_name,
        last_name="Tester",
        email=f"{first_name.lower()}@company.com",
        phone="555-0100",
        role="Engineer",
        department=department,
        hire_date=date(2023, 1, 9),
        status=status,
    )


@pytest.fixture
def employees() -> InMemoryEmployeeStore:
    return InMemoryEmployeeStore(
        [
            _employee("Ana", "Engineering"),
            _employee("Ben", "Engineering"),
            _employee("Cai", "Engineering", EmployeeStatus.ON_LEAVE),
            _employee("Dee", "Sales", EmployeeStatus.INACTIVE),
            _employee("Eli", "engineering"),
        ]
    )


def test_create_department_starts_with_matching_head_counts(employees):
    svc = DepartmentService(InMemoryDepartmentStore(), employees)

    created = svc.create({"name": " Engineering ", "description": "Builds the product"})

    assert created.department.department_id == 1
    assert created.department.name == "Engineering"
    assert created.employee_count == 3
    assert created.active_employee_count == 2


def test_counts_match_exact_department_name(employees):
    svc = DepartmentService(InMemoryDepartmentStore(), employees)
    svc.create({"name": "Sales", "description": "Revenue"})
    svc.create({"name": "Design", "description": "Product design"})

    counts = {o.department.name: (o.employee_count, o.active_employee_count) for o in svc.list_departments()}

    assert counts == {"Design": (0, 0), "Sales": (1, 0)}


def test_list_is_ordered_by_name(employees):
    svc = DepartmentService(InMemoryDepartmentStore(), employees)
    for name in ("Sales", "Engineering", "design"):
        svc.create({"name": name, "description": "Team"})

    assert [o.department.name for o in svc.list_departments()] == ["design", "Engineering", "Sales"]


def test_name_and_description_are_required(employees):
    svc = DepartmentService(InMemoryDepartmentStore(), employees)

    with pytest.raises(ValidationError) as exc:
        svc.create({"name": "  ", "description": 42})

    assert exc.value.errors == {
        "name": "Department name is required",
        "description": "Description must be text",
    }


def test_duplicate_name_is_rejected_case_insensitively(employees):
    svc = DepartmentService(InMemoryDepartmentStore(), employees)
    svc.create({"name": "Engineering", "description": "Builds the product"})

    with pytest.raises(ValidationError) as exc:
        svc.create({"name": "ENGINEERING", "description": "Again"})

    assert "name" in exc.value.errors


def test_manager_must_be_an_existing_employee(employees):
    svc = DepartmentService(InMemoryDepartmentStore(), employees)

    with pytest.raises(ValidationError) as exc:
        svc.create({"name": "Sales", "description": "Revenue", "manager_id": 99})
    assert exc.value.errors == {"managerId": "Manager must be an existing employee"}

    with pytest.raises(ValidationError):
        svc.create({"name": "Sales", "description": "Revenue", "manager_id": "boss"})

    created = svc.create({"name": "Sales", "description": "Revenue", "manager_id": 4})
    assert created.department.manager_id == 4


def test_update_keeps_own_name_and_revalidates(employees):
    svc = DepartmentService(InMemoryDepartmentStore(), employees)
    created = svc.create({"name": "Engineering", "description": "Builds the product"})
    svc.create({"name": "Sales", "description": "Revenue"})

    updated = svc.update(created.department.department_id, {"description": "Platform and apps"})

    assert updated.department.name == "Engineering"
    assert updated.department.description == "Platform and apps"
    assert updated.employee_count == 3
    with pytest.raises(ValidationError):
        svc.update(created.department.department_id, {"name": "sales"})
    with pytest.raises(ValidationError):
        svc.update(created.department.department_id, {"budget": 10})


def test_members_lists_employees_of_the_department(employees):
    svc = DepartmentService(InMemoryDepartmentStore(), employees)
    created = svc.create({"name": "Engineering", "description": "Builds the product"})

    assert [e.first_name for e in svc.members(created.department.department_id)] == ["Cai", "Ben", "Ana"]


def test_unknown_department_raises_not_found(employees):
    svc = DepartmentService(InMemoryDepartmentStore(), employees)

    with pytest.raises(NotFoundError):
        svc.get(5)
    with pytest.raises(NotFoundError):
        svc.members(5)
    with pytest.raises(NotFoundError):
        svc.update(5, {"description": "x"})
    with pytest.raises(NotFoundError):
        svc.delete(5)


def test_department_serialization(employees):
    svc = DepartmentService(InMemoryDepartmentStore(), employees)
    created = svc.create({"name": "Engineering", "description": "Builds the product", "manager_id": 1})

    assert department_to_dict(created) == {
        "id": 1,
        "name": "Engineering",
        "description": "Builds the product",
        "managerId": 1,
        "employeeCount": 3,
        "activeEmployeeCount": 2,
    }
