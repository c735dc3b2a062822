"""Example FastAPI application with Siteline pageview tracking."""

import logging
import os

from fastapi import FastAPI

from siteline import Siteline
from siteline.middleware.fastapi import SitelineMiddleware

logging.basicConfig(level=logging.INFO)

siteline = Siteline(
    website_key=os.getenv("SITELINE_WEBSITE_KEY", "siteline_secret_" + "0" * 32),
    debug=True,  # Log every send outcome
    integration_type="fastapi",
)

app = FastAPI(title="Siteline Example")

# Track every request (health checks excluded by default)
app.add_middleware(SitelineMiddleware, client=siteline)


@app.get("/")
async def root():
    """Root endpoint."""
    return {"message": "Hello from the Siteline example"}


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}


@app.on_event("shutdown")
async def shutdown_event():
    """Wait for in-flight pageviews, then close the HTTP client."""
    await siteline.aclose()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
