"""Local stand-in for the genre prediction service."""
from __future__ import annotations

import random
from typing import List, Optional

from flask import Flask, jsonify, request
from pydantic import ValidationError

from genre_recs.catalog.models import AssetRecord

GENRES: List[str] = [
    "Comedy",
    "Drama",
    "Action",
    "Thriller",
    "Sci-Fi",
    "Adventure",
    "Documentary",
    "History",
    "Fantasy",
    "Horror",
]


def generate_mock_genres(rng: random.Random) -> List[str]:
    """Pick a shuffled, non-empty subset of the known genres."""
    genres = list(GENRES)
    rng.shuffle(genres)
    count = rng.randint(1, len(genres))
    return genres[:count]


def create_app(rng: Optional[random.Random] = None) -> Flask:
    app = Flask(__name__)
    generator = rng or random.Random()

    @app.route("/predict", methods=["POST"])
    def predict():
        payload = request.get_json(silent=True)
        if not isinstance(payload, dict):
            return "Invalid request payload", 400
        try:
            AssetRecord.model_validate(payload)
        except ValidationError:
            return "Invalid request payload", 400
        return jsonify({"genres": generate_mock_genres(generator)})

    return app
