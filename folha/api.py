# folha/api.py

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from folha.cadastro.router import router as employees_router
from folha.calculo.router import router as payroll_router
from folha.config import settings
from folha.exceptions import PayrollError
from folha.logging_config import log

app = FastAPI(title=settings.APP_NAME, version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(employees_router)
app.include_router(payroll_router)


@app.exception_handler(PayrollError)
async def payroll_error_handler(request: Request, exc: PayrollError):
    if exc.status_code >= 500:
        log.error(f"Erro interno em {request.url.path}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "status": exc.status_code,
            "error": type(exc).__name__,
            "message": exc.message,
            "path": request.url.path,
            "details": jsonable_encoder(exc.context),
        },
    )


@app.get("/health")
def health():
    return {"status": "ok", "app": settings.APP_NAME}
