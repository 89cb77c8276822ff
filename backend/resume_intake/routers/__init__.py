from .resumes import router as resumes_router
from .candidates import router as candidates_router
from .analysis import router as analysis_router

__all__ = ["resumes_router", "candidates_router", "analysis_router"]
