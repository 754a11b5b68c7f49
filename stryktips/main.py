"""
FastAPI entrypoint pour le generateur de systemes
Expose health check, generation et export texte des rangees
"""
from fastapi import FastAPI, HTTPException
from fastapi.responses import JSONResponse, PlainTextResponse
from contextlib import asynccontextmanager
import logging
import uuid
from typing import Optional

from stryktips import __version__
from stryktips.contracts.output_models import GenerationResult
from stryktips.pipelines.generation_pipeline import GenerationPipeline
from stryktips.scoring.ticket_expander import TicketExpander

# Configuration logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Gestion du cycle de vie de l'application"""
    logger.info("Ticket generator demarrage...")
    app.state.latest_result = None
    yield
    logger.info("Ticket generator arret...")


app = FastAPI(
    title="Stryktipset Ticket Generator",
    description="Systemes 4 helgarderingar, 4 halvgarderingar, 5 spikar",
    version=__version__,
    lifespan=lifespan
)
app.state.latest_result = None


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "service": "ticket-generator",
        "version": __version__
    }


@app.post("/tickets/generate", response_model=GenerationResult)
def generate_tickets(trace_id: Optional[str] = None):
    """
    Declenche un run de generation

    Args:
        trace_id: ID de tracabilite (genere si non fourni)

    Returns:
        GenerationResult avec rangees et detail par match
    """
    trace_id = trace_id or str(uuid.uuid4())
    logger.info(f"[{trace_id}] Generation request received")

    # Un nouveau run efface le resultat precedent
    app.state.latest_result = None

    try:
        result = GenerationPipeline(trace_id=trace_id).run()
    except Exception as e:
        logger.error(f"[{trace_id}] Exception generation: {e}")
        raise HTTPException(status_code=500, detail=str(e))

    if result.status == "error":
        logger.error(f"[{trace_id}] Generation echouee: {result.error_cause}")
        return JSONResponse(
            status_code=500,
            content=result.model_dump_json_safe()
        )

    app.state.latest_result = result
    logger.info(f"[{trace_id}] Generation reussie: {result.rows_count} rangees")
    return result


@app.get("/tickets/latest", response_model=GenerationResult)
async def get_latest_result():
    """Dernier systeme genere avec succes"""
    result = app.state.latest_result
    if result is None:
        raise HTTPException(status_code=404, detail="No ticket generated yet.")
    return result


@app.get("/tickets/latest/export", response_class=PlainTextResponse)
async def export_latest_rows():
    """Rangees du dernier systeme, une par ligne"""
    result = app.state.latest_result
    if result is None or not result.rows:
        raise HTTPException(
            status_code=404,
            detail="No rows to copy. Generate a Stryktips first."
        )
    return PlainTextResponse(TicketExpander().render_rows(result.rows))


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8001)
