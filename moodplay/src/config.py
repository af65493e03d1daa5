import os
from dotenv import load_dotenv


class Config:
    load_dotenv()

    DEBUG = os.getenv("DEBUG", "true").lower() == "true"
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*")

    # Cantidad de juegos devueltos por recomendación y por /catalog/random
    RECOMMENDATION_LIMIT = int(os.getenv("RECOMMENDATION_LIMIT", "6"))
    RANDOM_GAMES_DEFAULT = int(os.getenv("RANDOM_GAMES_DEFAULT", "6"))

    # Proveedor de sugerencias externas (camino DOWNLOAD)
    SUGGESTION_PROVIDER = os.getenv("SUGGESTION_PROVIDER", "mock")
    SUGGESTION_TIMEOUT_SECONDS = float(os.getenv("SUGGESTION_TIMEOUT_SECONDS", "5.0"))
    SUGGESTION_MAX_TRIES = int(os.getenv("SUGGESTION_MAX_TRIES", "1"))
