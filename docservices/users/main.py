from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

from docservices.base_microservice import create_tables
from docservices.errors import install_error_handlers
from docservices.users.router import router as users_router, base_service

# Register the User model on Base before tables are created
from docservices.users import models  # noqa: F401


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for the user-directory service.
    Creates missing tables on startup.
    """
    base_service.log_event("service.startup", {"service": base_service.name})
    try:
        await create_tables()
    except Exception as e:
        base_service.log_error(e, context="User directory startup")
        raise
    yield
    base_service.log_event("service.shutdown", {"service": base_service.name})


app = FastAPI(
    title="User Directory Service",
    description="Canonical store of user records for the document-management platform",
    lifespan=lifespan
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # In production, replace with specific origins
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

install_error_handlers(app)
app.include_router(users_router)


@app.get("/", tags=["root"])
async def root():
    """Root endpoint returning service information."""
    return {
        "name": "User Directory Service",
        "version": "0.1.0",
        "endpoints": ["/api/usuarios"]
    }


@app.get("/health", tags=["health"])
async def health_check():
    return base_service.health()


# For running directly with uvicorn
if __name__ == "__main__":
    import uvicorn
    uvicorn.run("docservices.users.main:app", host="0.0.0.0", port=8001, reload=True)
