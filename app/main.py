import logging
import time

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.ai.gemini_client import AIServiceError
from app.config import settings
from app.routes import auth, dashboard, inspections, photos, reference_data

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="WorkSafe - Inspecciones de Seguridad",
    description="API para registrar inspecciones de seguridad, administrar catálogos y analizar tendencias con IA.",
    version="1.0.0"
)


# Middleware para medir el tiempo de las solicitudes
@app.middleware("http")
async def add_process_time_header(request: Request, call_next):
    start_time = time.time()
    response = await call_next(request)
    process_time = time.time() - start_time
    logger.debug("Tiempo de procesamiento para %s: %.2f segundos", request.url, process_time)
    response.headers["X-Process-Time"] = str(process_time)
    return response


@app.exception_handler(AIServiceError)
async def ai_service_error_handler(request: Request, exc: AIServiceError):
    logger.error("Error del servicio de IA en %s: %s", request.url.path, exc)
    return JSONResponse(status_code=502, content={"detail": f"Error en el análisis de IA: {exc}"})


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Incluir las rutas de los diferentes módulos
app.include_router(auth.router, prefix="/api/auth", tags=["Autenticación"])
app.include_router(inspections.router, prefix="/api", tags=["Inspecciones"])
app.include_router(photos.router, prefix="/api", tags=["Fotos"])
app.include_router(reference_data.router, prefix="/api", tags=["Catálogos"])
app.include_router(dashboard.router, prefix="/api", tags=["Dashboard"])

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=settings.PORT)
