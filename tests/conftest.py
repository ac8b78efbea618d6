import pytest

from vsp.services import InMemorySequenceAllocator, IdentifierCodec, GradingEngine
from vsp.services.student_ids import StudentIdGenerator
from vsp.services.staff_ids import StaffIdGenerator


@pytest.fixture
def allocator():
    return InMemorySequenceAllocator()


@pytest.fixture
def codec(allocator):
    return IdentifierCodec(allocator, clock=lambda: 2024)


@pytest.fixture
def students(allocator):
    return StudentIdGenerator(allocator, clock=lambda: 2024)


@pytest.fixture
def staff(allocator):
    return StaffIdGenerator(allocator, clock=lambda: 2024)


@pytest.fixture
def engine():
    return GradingEngine()
