"""
Credit Builder - FastAPI Application

Main entry point for the Credit Builder backend.

Architecture:
- CreditProfile (SSOT #1) → AuditEngine → CreditAudit (SSOT #2)
- CreditAudit candidate → Lob mail gateway → DisputeRecord (SSOT #3)
- DisputeRecord history → LifecycleTracker → pending / overdue partition
"""
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .routers import profiles_router, disputes_router, creditors_router, guidance_router
from .database import init_db


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize database on startup."""
    init_db()
    yield

# Create FastAPI app
app = FastAPI(
    lifespan=lifespan,
    title="Credit Builder",
    description="""
    Credit Builder - Credit Audit and Dispute Tracking

    Audits a consumer credit profile, ranks the negative items worth
    disputing, mails dispute letters by certified mail and tracks each
    dispute against its 30-day response deadline.

    ## Pipeline
    1. **Profile Store**: intake → CreditProfile (SSOT #1)
    2. **Audit Engine**: CreditProfile → CreditAudit (SSOT #2)
    3. **Mail Gateway**: letter type + target → DisputeRecord (SSOT #3)
    4. **Lifecycle Tracker**: DisputeRecord history → pending / overdue
    5. **Guidance**: question → credit education or business credit answer

    ## Key Principles
    - Audits are deterministic and never mutate the profile
    - Deadlines are fixed when a letter is sent
    - Overdue is derived from the deadline, never stored
    - A failed send never creates a dispute record
    """,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure appropriately for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(profiles_router)
app.include_router(disputes_router)
app.include_router(creditors_router)
app.include_router(guidance_router)


@app.get("/")
async def root():
    """Root endpoint - API information."""
    return {
        "name": "Credit Builder",
        "version": "1.0.0",
        "description": "Credit Audit and Dispute Tracking",
        "docs": "/docs",
        "architecture": {
            "ssot_1": "CreditProfile - Output of intake",
            "ssot_2": "CreditAudit - Output of Audit Engine",
            "ssot_3": "DisputeRecord - Output of Mail Gateway",
        }
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "version": "1.0.0"}


# For running with: python -m app.main
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8001)
