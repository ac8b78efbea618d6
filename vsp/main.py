"""
Main entry point for the school portal core.
"""

import logging
import threading
import time
from typing import Optional

from .config import PortalSettings, load_settings, configure_logging
from .core.enums import EntityKind
from .core.identifiers import SectionStudentFormat, DepartmentStaffFormat
from .services import InMemorySequenceAllocator, IdentifierCodec, GradingEngine
from .api.rest_api import PortalRestAPI


logger = logging.getLogger(__name__)


class SchoolPortal:
    """Wires the allocator, identifier codec, grading engine and REST API together."""

    def __init__(self, settings: Optional[PortalSettings] = None):
        self._settings = settings or PortalSettings()
        self._allocator = None
        self._codec = None
        self._grading = None
        self._rest_api = None
        self._rest_thread = None

        # Initialize portal
        self._initialize()

    def _initialize(self):
        """Initialize the portal with all services."""
        logger.info("Initializing school portal core...")

        self._allocator = InMemorySequenceAllocator()
        if self._settings.sequence_seeds:
            self._allocator.seed(self._settings.sequence_seeds)
        logger.info("Sequence allocator initialized with %d seeded keys",
                    len(self._settings.sequence_seeds))

        self._codec = IdentifierCodec(
            self._allocator,
            email_domain=self._settings.email_domain,
            badge_prefix=self._settings.badge_prefix,
        )
        self._grading = GradingEngine()
        logger.info("Identifier codec and grading engine initialized")

        self._rest_api = PortalRestAPI(self._codec, self._grading, self._settings)
        logger.info("REST API initialized")

    @property
    def settings(self) -> PortalSettings:
        return self._settings

    @property
    def codec(self) -> IdentifierCodec:
        return self._codec

    @property
    def grading(self) -> GradingEngine:
        return self._grading

    @property
    def app(self):
        return self._rest_api.app

    def start_rest_server(self, host: Optional[str] = None, port: Optional[int] = None, block: bool = True):
        """Start the REST server."""
        import uvicorn

        host = host or self._settings.host
        port = port or self._settings.port

        def run_server():
            uvicorn.run(
                self.app,
                host=host,
                port=port,
                log_level=self._settings.log_level.lower()
            )

        logger.info("Starting REST server on %s:%d", host, port)
        if block:
            run_server()
            return

        # Start server in a separate thread
        self._rest_thread = threading.Thread(target=run_server, daemon=True)
        self._rest_thread.start()

    def run_demo(self):
        """Run a demonstration of the identifier codec and grading engine."""
        codec = self._codec

        print("=== Student identifiers ===")
        for params in ({"class_code": "JSS1"}, {"class_code": "JSS1"}, {"class_code": "PRY5"}):
            identifier = codec.generate(EntityKind.STUDENT, "standard", params)
            print(f"  {identifier}  badge={codec.badge_number(identifier)}")
        print(f"  {codec.generate(EntityKind.STUDENT, 'year-only')}")
        print(f"  {codec.generate(EntityKind.STUDENT, SectionStudentFormat(section='primary'))}")
        legacy = codec.generate(EntityKind.STUDENT, "legacy", {"original_id": "20201234"})
        print(f"  {legacy}  badge={codec.badge_number(legacy)}")

        print("\n=== Staff identifiers ===")
        batch = codec.generate_batch(EntityKind.STAFF, DepartmentStaffFormat(department="tch"), count=3)
        for identifier in batch:
            print(f"  {identifier}  login={codec.username('Ada', 'Obi', identifier)}")
        print(f"  {codec.generate(EntityKind.STAFF, 'simplified')}")

        print("\n=== Results ===")
        first_term = self._grading.summarize_term([
            {"ca_score": 32, "exam_score": 48, "credit_units": 2},
            {"ca_score": 20, "exam_score": 30, "credit_units": 1},
            {"ca_score": 15, "exam_score": 27, "credit_units": 1},
        ])
        for subject in first_term.subjects:
            print(f"  total={subject.total_score:g} grade={subject.grade.value} "
                  f"points={subject.grade_point} ({subject.remark})")
        second_term = self._grading.summarize_term([
            {"ca_score": 35, "exam_score": 50, "credit_units": 2},
            {"ca_score": 25, "exam_score": 38, "credit_units": 2},
        ])
        print(f"  GPA term 1: {first_term.gpa:.2f}")
        print(f"  GPA term 2: {second_term.gpa:.2f}")
        cgpa = self._grading.aggregate_across_terms(
            [self._grading.term_result(first_term), self._grading.term_result(second_term)]
        )
        print(f"  CGPA: {cgpa:.2f}")


def main():
    """Main entry point."""
    import argparse

    parser = argparse.ArgumentParser(description="Vincollins School Portal core")
    parser.add_argument("--host", type=str, help="REST server host")
    parser.add_argument("--port", type=int, help="REST server port")
    parser.add_argument("--demo", action="store_true", help="Run demo mode")
    parser.add_argument("--config", type=str, help="Configuration file path")

    args = parser.parse_args()

    # Load configuration
    settings = load_settings(args.config)
    configure_logging(settings.log_level)

    portal = SchoolPortal(settings)

    if args.demo:
        portal.run_demo()
        return

    try:
        portal.start_rest_server(args.host, args.port, block=False)
        # Keep running
        print("\nPortal API is running. Press Ctrl+C to stop.")
        while True:
            time.sleep(1)
    except KeyboardInterrupt:
        print("\nShutting down...")


if __name__ == "__main__":
    main()
