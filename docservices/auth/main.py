from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

from docservices.auth.directory_client import directory_client
from docservices.auth.router import router as auth_router, base_service
from docservices.errors import install_error_handlers


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for the authentication service.
    The service keeps no state, so startup only logs where the directory lives.
    """
    base_service.log_event("service.startup", {
        "service": base_service.name,
        "user_service_url": directory_client.base_url
    })
    yield
    base_service.log_event("service.shutdown", {"service": base_service.name})


app = FastAPI(
    title="Authentication Service",
    description="Credential verification and token issuance for the document-management platform",
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
app.include_router(auth_router)


@app.get("/", tags=["root"])
async def root():
    """Root endpoint returning service information."""
    return {
        "name": "Authentication Service",
        "version": "0.1.0",
        "endpoints": ["/api/auth/login", "/api/auth/me"]
    }


@app.get("/health", tags=["health"])
async def health_check():
    return base_service.health()


# For running directly with uvicorn
if __name__ == "__main__":
    import uvicorn
    uvicorn.run("docservices.auth.main:app", host="0.0.0.0", port=8002, reload=True)
