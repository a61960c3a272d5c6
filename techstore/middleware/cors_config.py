from fastapi.middleware.cors import CORSMiddleware

from techstore.config import settings


def configure_cors(app):
    origins = settings.cors_origins
    if not origins:
        origins = ["http://localhost:3000"]

    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["*"],
        max_age=86400,
    )
