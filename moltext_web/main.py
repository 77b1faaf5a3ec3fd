"""
MolText Web Interface - Main Application

Serves molecule depictions as character-grid text, SVG or PNG:

- GET /?smi=<SMILES> or /?name=<chemical name> renders a structure
- POST /api/render renders a caller-supplied V2000 molblock
- GET /health reports service status

Every client is rate limited per minute.
"""

import re
import time
import logging
from email.utils import formatdate
from typing import Optional

from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.responses import PlainTextResponse, Response
from pydantic import BaseModel, Field

from moltext_web import __version__
from moltext_web.config import Settings
from moltext_web.drawer import AsciiMolDrawer, DrawerConfig
from moltext_web.errors import InputFormatError, NameResolutionError, StructureGenerationError
from moltext_web.name_lookup import name_to_smiles
from moltext_web.rate_limit import RateLimiter
from moltext_web.structure import mol_from_smiles, smiles_to_molblock
from moltext_web.vector import rasterize_png, render_svg

settings = Settings.from_env()

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level, logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

app = FastAPI(title="MolText", version=__version__)

# ==============================================================================
# Configuration
# ==============================================================================

CACHE_SECONDS = 31536000  # one year
RETRY_AFTER_SECONDS = 60
USAGE = "Usage: /?smi=c1ccccc1 or /?name=acetamide"
TEXT_PLAIN = "text/plain; charset=utf-8"
INK_PATTERN = re.compile(r"#[0-9a-fA-F]{3,8}|[a-zA-Z]{3,20}")

# Upper bounds for caller-supplied render settings
MAX_TARGET_BOND_CHARS = 8.0
MAX_PADDING = 20

rate_limiter = RateLimiter(limit=settings.rate_limit_per_minute, period=60.0)
unicode_drawer = AsciiMolDrawer(DrawerConfig(use_unicode=True))
ascii_drawer = AsciiMolDrawer(DrawerConfig(use_unicode=False))


# ==============================================================================
# Pydantic Models
# ==============================================================================

class RenderRequest(BaseModel):
    molblock: str
    ascii: bool = False
    show_formal_charge: bool = True
    target_bond_chars: float = Field(1.0, gt=0, le=MAX_TARGET_BOND_CHARS)
    padding: int = Field(2, ge=0, le=MAX_PADDING)


# ==============================================================================
# Helpers
# ==============================================================================

def _text(body: str, status_code: int = 200, headers: Optional[dict] = None) -> PlainTextResponse:
    return PlainTextResponse(body, status_code=status_code, headers=headers,
                             media_type=TEXT_PLAIN)


def client_key(request: Request) -> str:
    ip = request.headers.get("cf-connecting-ip")
    if not ip and request.client:
        ip = request.client.host
    return f"public:{ip or 'unknown'}"


def _check_rate_limit(request: Request) -> Optional[PlainTextResponse]:
    key = client_key(request)
    result = rate_limiter.hit(key)
    if result.success:
        return None
    logger.warning(f"Rate limit exceeded for {key}")
    return _text(
        f"429 Too Many Requests – limit is {rate_limiter.limit}/min",
        status_code=429,
        headers={"Retry-After": str(RETRY_AFTER_SECONDS)},
    )


def cache_headers() -> dict:
    return {
        "cache-control": f"public, max-age={CACHE_SECONDS}, immutable",
        "expires": formatdate(time.time() + CACHE_SECONDS, usegmt=True),
    }


# ==============================================================================
# API Endpoints
# ==============================================================================

@app.get("/")
def render_structure(
    request: Request,
    smi: Optional[str] = None,
    name: Optional[str] = None,
    echo: Optional[str] = None,
    use_ascii: Optional[str] = Query(None, alias="ascii"),
    fmt: str = Query("text", alias="format"),
    ink: Optional[str] = None,
):
    """Render a SMILES string or chemical name."""
    limited = _check_rate_limit(request)
    if limited is not None:
        return limited

    if name and smi:
        return _text("Both 'name' and 'smi' provided; supply only one.", status_code=422)

    if fmt not in ("text", "svg", "png"):
        return _text(f"Unknown format: {fmt}", status_code=400)

    if ink and not INK_PATTERN.fullmatch(ink):
        return _text("Invalid ink color", status_code=400)

    smiles = smi or ""
    if not smiles and name:
        if not settings.opsin_url:
            return _text("Name lookup is not configured", status_code=503)
        try:
            smiles = name_to_smiles(name, settings.opsin_url, timeout=settings.opsin_timeout)
        except NameResolutionError as e:
            return _text(str(e), status_code=400)

    if not smiles:
        return _text(USAGE, status_code=400)

    try:
        if fmt == "text":
            molblock = smiles_to_molblock(smiles)
        else:
            mol = mol_from_smiles(smiles)
    except StructureGenerationError:
        return _text("Invalid SMILES", status_code=400)

    if fmt != "text":
        size = (settings.svg_size, settings.svg_size)
        svg = render_svg(mol, size=size, ink=ink or settings.ink_color)
        if fmt == "svg":
            return Response(svg, media_type="image/svg+xml", headers=cache_headers())
        try:
            png = rasterize_png(svg)
        except (ImportError, OSError) as e:
            logger.error(f"PNG rasterization unavailable: {e}")
            return _text("PNG rasterization unavailable", status_code=501)
        return Response(png, media_type="image/png", headers=cache_headers())

    drawer = ascii_drawer if use_ascii == "1" else unicode_drawer
    try:
        art = drawer.draw_molblock(molblock)
    except InputFormatError as e:
        logger.error(f"Cannot render {smiles}: {e}")
        return _text(str(e), status_code=422)

    body = f"{smiles}\n{art}\n" if echo == "1" else f"{art}\n"
    return _text(body, headers=cache_headers())


@app.post("/api/render")
def render_molblock(render_req: RenderRequest, request: Request):
    """Render a caller-supplied V2000 molblock."""
    limited = _check_rate_limit(request)
    if limited is not None:
        return limited

    try:
        config = DrawerConfig(
            target_bond_chars=render_req.target_bond_chars,
            padding=render_req.padding,
            show_formal_charge=render_req.show_formal_charge,
            use_unicode=not render_req.ascii,
        )
        art = AsciiMolDrawer(config).draw_molblock(render_req.molblock)
    except ValueError as e:
        # InputFormatError is a ValueError as well
        raise HTTPException(status_code=422, detail=str(e))

    rows = art.split("\n") if art else []
    return {
        "art": art,
        "width": max((len(row) for row in rows), default=0),
        "height": len(rows),
    }


@app.get("/health")
async def health():
    return {"status": "ok", "version": __version__}


# ==============================================================================
# Main Entry Point
# ==============================================================================

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8787, log_level="info")
