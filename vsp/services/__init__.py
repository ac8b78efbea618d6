"""
Services module containing sequence allocation, identifier generation and grading.
"""

from .sequence_allocator import InMemorySequenceAllocator
from .student_ids import StudentIdGenerator
from .staff_ids import StaffIdGenerator
from .identifier_codec import IdentifierCodec
from .grading_service import GradingEngine, round2

__all__ = [
    "InMemorySequenceAllocator",
    "StudentIdGenerator",
    "StaffIdGenerator",
    "IdentifierCodec",
    "GradingEngine",
    "round2",
]
