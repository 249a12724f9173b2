# meetpoint/server.py
"""
FastAPI server for the meetpoint CLI.
"""

from typing import Optional

from fastapi import FastAPI, Request
from starlette.responses import JSONResponse

from meetpoint.analysis.config import SolverConfig
from meetpoint.analysis.eta import estimate_eta_minutes, format_eta
from meetpoint.analysis.recommender import Recommender
from meetpoint.analysis.types import DEFAULT_MODE, RecommendationMode
from meetpoint.utils.log import get_logger
from meetpoint.utils.validate import (
    EtaOut,
    EtaRequest,
    RecommendationOut,
    RecommendRequest,
)

logger = get_logger(__name__)


def create_app(cfg: SolverConfig | None = None) -> FastAPI:
    """
    Build a FastAPI instance bound to a solver configuration.
    """
    app = FastAPI(title="meetpoint")
    app.state.recommender = Recommender(cfg)

    @app.get("/api/status", response_class=JSONResponse)
    async def status() -> JSONResponse:
        return JSONResponse(status_code=200, content={"status": "ok"})

    @app.get("/api/modes", response_class=JSONResponse)
    async def get_modes() -> JSONResponse:
        """
        return the supported recommendation modes and the default one.
        """
        return JSONResponse(
            status_code=200,
            content={
                "modes": [m.value for m in RecommendationMode],
                "default": DEFAULT_MODE.value,
            },
        )

    @app.post("/api/recommend", response_model=Optional[RecommendationOut])
    def recommend(request: Request, body: RecommendRequest):
        """
        return the recommended meeting point, or null for no participants.
        """
        recommender: Recommender = request.app.state.recommender
        mode = RecommendationMode.parse(body.mode)
        participants = [p.to_participant() for p in body.participants]
        rec = recommender.run(participants, mode)
        if rec is None:
            logger.info("Recommend: no participants, nothing to compute")
            return None
        logger.info(
            "Recommend: mode=%s, participants=%d, center=(%s, %s)",
            mode.value, len(participants), rec.center.latitude, rec.center.longitude,
        )
        return RecommendationOut.from_recommendation(rec)

    @app.post("/api/eta", response_model=EtaOut)
    async def get_eta(body: EtaRequest):
        minutes = estimate_eta_minutes(
            body.origin.to_point(), body.destination.to_point(), body.mode
        )
        return EtaOut(minutes=minutes, label=format_eta(minutes))

    return app
