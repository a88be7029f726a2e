"""
CoachLoop backend: coaching transcripts in, structured insights and action items out.
Sessions and team members live in Postgres; insights come from a hosted model.
Deployment-ready: CORS, configurable host/port via env.
"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from coachloop.core.config import get_settings
from coachloop.core.logging_setup import configure_logging
from coachloop.routers import sessions, team_members

settings = get_settings()
configure_logging()

app = FastAPI(
    title="CoachLoop API",
    description="Coaching-session insights per team member, with trackable action items.",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(team_members.router)
app.include_router(sessions.router)


@app.get("/health")
def health():
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.host, port=settings.port)
