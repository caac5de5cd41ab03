from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from lifesim.config import Settings, build_llm, load_settings
from lifesim.llm import LLM
from lifesim.routes import router


def create_app(settings: Settings | None = None, llm: LLM | None = None) -> FastAPI:
    settings = settings or load_settings()

    app = FastAPI(title="lifesim")
    app.state.settings = settings
    app.state.llm = llm or build_llm(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.cors_origin],
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_credentials=True,
        allow_headers=["*"],
    )
    app.include_router(router)
    return app
