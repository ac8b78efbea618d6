"""
REST API for the portal core using FastAPI.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .. import __version__
from ..config import PortalSettings
from ..core.exceptions import ValidationError
from ..services import IdentifierCodec, GradingEngine


logger = logging.getLogger(__name__)


# Pydantic models for API
class IdentifierRequest(BaseModel):
    kind: str = Field(..., pattern=r'^(student|staff)$')
    format: str = Field("standard", pattern=r'^(standard|year-only|section|legacy|department|simplified)$')
    class_code: Optional[str] = Field(None, max_length=10)
    section: Optional[str] = Field(None, max_length=20)
    department: Optional[str] = Field(None, max_length=20)
    year: Optional[int] = Field(None, ge=1000, le=9999)
    original_id: Optional[str] = Field(None, max_length=100)
    original_number: Optional[int] = Field(None, ge=0, le=9999)

    def params(self) -> Dict[str, Any]:
        return self.model_dump(exclude={"kind", "format"}, exclude_none=True)


class BatchIdentifierRequest(IdentifierRequest):
    count: int = Field(..., ge=1)


class IdentifierResponse(BaseModel):
    identifier: str
    parsed: Dict[str, Any]


class BatchIdentifierResponse(BaseModel):
    identifiers: List[str]
    count: int


class BadgeResponse(BaseModel):
    identifier: str
    badge_number: str


class UsernameRequest(BaseModel):
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    identifier: str = Field(..., min_length=1, max_length=120)


class UsernameResponse(BaseModel):
    username: str


class GradeResponse(BaseModel):
    score: float
    grade: str
    grade_point: float
    remark: str


class ResultEntry(BaseModel):
    ca_score: float = Field(..., ge=0, le=40)
    exam_score: float = Field(..., ge=0, le=60)
    credit_units: float = Field(1, ge=0)


class SubjectResultIn(BaseModel):
    score: float
    credit_units: float = Field(..., ge=0)


class TermResultIn(BaseModel):
    gpa: float = Field(..., ge=0)
    credits: float = Field(..., ge=0)


class GPARequest(BaseModel):
    results: List[SubjectResultIn] = Field(default_factory=list)


class CGPARequest(BaseModel):
    terms: List[TermResultIn] = Field(default_factory=list)


class TermSummaryRequest(BaseModel):
    subjects: List[ResultEntry] = Field(default_factory=list)


class PortalRestAPI:
    """REST API exposing identifier and grading operations to portal forms."""

    def __init__(self, codec: IdentifierCodec, grading_engine: GradingEngine,
                 settings: Optional[PortalSettings] = None):
        self._codec = codec
        self._grading = grading_engine
        self._settings = settings or PortalSettings()

        # Create FastAPI app
        self.app = FastAPI(
            title="Vincollins School Portal API",
            description="Identifier generation and result grading for the school portal",
            version=__version__,
            docs_url="/docs",
            redoc_url="/redoc"
        )

        # Add CORS middleware
        self.app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

        # Setup routes
        self._setup_routes()

    def _setup_routes(self):
        """Setup API routes."""

        @self.app.exception_handler(ValidationError)
        async def validation_error_handler(request: Request, exc: ValidationError):
            logger.warning("Rejected %s %s: %s", request.method, request.url.path, exc.message)
            return JSONResponse(
                status_code=status.HTTP_400_BAD_REQUEST,
                content={"detail": exc.message, "error_code": exc.error_code, "details": exc.details},
            )

        @self.app.get("/", response_model=Dict[str, str])
        async def root():
            """Root endpoint."""
            return {
                "message": "Vincollins School Portal API",
                "version": __version__,
                "docs": "/docs"
            }

        @self.app.get("/health", response_model=Dict[str, str])
        async def health_check():
            """Health check endpoint."""
            return {"status": "healthy", "timestamp": datetime.now(timezone.utc).isoformat()}

        # Identifier endpoints
        @self.app.post("/identifiers", response_model=IdentifierResponse, status_code=status.HTTP_201_CREATED)
        async def generate_identifier(request: IdentifierRequest):
            """Generate one identifier."""
            identifier = self._codec.generate(request.kind, request.format, request.params())
            return IdentifierResponse(identifier=identifier, parsed=self._codec.parse(identifier).to_dict())

        @self.app.post("/identifiers/batch", response_model=BatchIdentifierResponse,
                       status_code=status.HTTP_201_CREATED)
        async def generate_identifier_batch(request: BatchIdentifierRequest):
            """Generate a batch of identifiers with consecutive numbers."""
            limit = self._settings.max_batch_size
            if request.count > limit:
                raise HTTPException(status_code=400, detail=f"Count must be between 1 and {limit}")
            identifiers = self._codec.generate_batch(request.kind, request.format, request.params(),
                                                     request.count)
            return BatchIdentifierResponse(identifiers=identifiers, count=len(identifiers))

        @self.app.get("/identifiers/{identifier}", response_model=Dict[str, Any])
        async def parse_identifier(identifier: str):
            """Decode an identifier; unknown shapes come back with is_valid false."""
            return self._codec.parse(identifier).to_dict()

        @self.app.get("/identifiers/{identifier}/badge", response_model=BadgeResponse)
        async def badge_number(identifier: str):
            """Get the ID card number for an identifier."""
            return BadgeResponse(identifier=identifier, badge_number=self._codec.badge_number(identifier))

        @self.app.post("/usernames", response_model=UsernameResponse)
        async def username(request: UsernameRequest):
            """Build the portal login for a person."""
            return UsernameResponse(
                username=self._codec.username(request.first_name, request.last_name, request.identifier)
            )

        # Grading endpoints
        @self.app.get("/grades/{score}", response_model=GradeResponse)
        async def grade_for(score: float):
            """Grade a total score."""
            result = self._grading.grade_for(score)
            return GradeResponse(score=score, grade=result.grade.value,
                                 grade_point=result.grade_point, remark=result.remark)

        @self.app.post("/results/score", response_model=Dict[str, Any])
        async def score_subject(entry: ResultEntry):
            """Grade one subject from its CA and exam scores."""
            graded = self._grading.score_subject(entry.ca_score, entry.exam_score, entry.credit_units)
            return graded.to_dict()

        @self.app.post("/results/gpa", response_model=Dict[str, float])
        async def gpa(request: GPARequest):
            """Compute a term GPA."""
            return {"gpa": self._grading.aggregate([r.model_dump() for r in request.results])}

        @self.app.post("/results/cgpa", response_model=Dict[str, float])
        async def cgpa(request: CGPARequest):
            """Compute a CGPA across terms."""
            return {"cgpa": self._grading.aggregate_across_terms([t.model_dump() for t in request.terms])}

        @self.app.post("/results/term-summary", response_model=Dict[str, Any])
        async def term_summary(request: TermSummaryRequest):
            """Grade a term's subjects and total them."""
            summary = self._grading.summarize_term([s.model_dump() for s in request.subjects])
            return summary.to_dict()
