from typing import Dict, List, Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from . import __version__
from .chesscom import decode_pgn
from .errors import ChessStatsError
from .stats import aggregate
from .utils import log, percent


class DecodeRequest(BaseModel):
    headers: Dict[str, str] = {}
    move_list: str


class DecodeResponse(BaseModel):
    pgn: str


class StatsRequest(BaseModel):
    pgns: List[str]
    player: Optional[str] = None


class StatsResponse(BaseModel):
    games: int
    player: str
    two_bishops: int
    percent: str


app = FastAPI(title="chessstats", version=__version__)


@app.post("/decode", response_model=DecodeResponse)
def decode(req: DecodeRequest):
    try:
        pgn = decode_pgn(req.headers, req.move_list)
    except ChessStatsError as e:
        log(f"decode failed: {e}")
        raise HTTPException(status_code=422, detail=str(e))
    return DecodeResponse(pgn=pgn)


@app.post("/stats", response_model=StatsResponse)
def stats(req: StatsRequest):
    try:
        res = aggregate(req.pgns, req.player)
    except ChessStatsError as e:
        log(f"stats failed: {e}")
        raise HTTPException(status_code=422, detail=str(e))
    return StatsResponse(
        games=res.total,
        player=res.hero,
        two_bishops=res.two_bishops,
        percent=percent(res.two_bishops, res.total),
    )


@app.get("/health")
def health():
    return {"ok": True, "version": __version__}
