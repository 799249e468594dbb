"""Flask API for experiment sizing - kept separate from the Streamlit wizard."""
import logging
import sys
from pathlib import Path

ROOT = Path(__file__).parent.parent.parent
sys.path.insert(0, str(ROOT))

from dataclasses import replace

from flask import Flask, request, jsonify

from src.experiment_planner.metrics import compute_metrics, variation_impact_table
from src.experiment_planner.schema import InvalidInputError
from src.experiment_planner.validation import parse_input

logger = logging.getLogger(__name__)

app = Flask(__name__)
MAX_TABLE_VARIANTS = 10


def _invalid(e: InvalidInputError):
    return jsonify({
        "error": "invalid input",
        "details": [{"field": name, "message": msg} for name, msg in e.errors],
    }), 400


@app.route("/ping", methods=["GET"])
def ping():
    return "pong"


@app.route("/sizing", methods=["POST"])
def sizing():
    data = request.get_json(silent=True)
    if not data:
        return jsonify({"error": "Empty request"}), 400
    if not isinstance(data, dict):
        return jsonify({"error": "Expected a JSON object"}), 400
    try:
        inp = parse_input(data)
        result = compute_metrics(inp)
        return jsonify({"input": inp.to_dict(), "result": result.to_dict()})
    except InvalidInputError as e:
        return _invalid(e)
    except Exception as e:
        logger.exception("Sizing failed")
        return jsonify({"error": str(e)}), 500


@app.route("/sizing/variations", methods=["POST"])
def sizing_variations():
    data = request.get_json(silent=True)
    if not data:
        return jsonify({"error": "Empty request"}), 400
    if not isinstance(data, dict):
        return jsonify({"error": "Expected a JSON object"}), 400
    try:
        max_variants = int(data.get("max_variants", 6))
        if not 2 <= max_variants <= MAX_TABLE_VARIANTS:
            raise InvalidInputError([
                ("max_variants", f"must be between 2 and {MAX_TABLE_VARIANTS}"),
            ])
        inp = parse_input(data)
        table = variation_impact_table(replace(inp, variant_count=2), max_variants=max_variants)
        return jsonify({"rows": table.to_dict(orient="records")})
    except InvalidInputError as e:
        return _invalid(e)
    except (TypeError, ValueError) as e:
        return jsonify({"error": str(e)}), 400
    except Exception as e:
        logger.exception("Variation table failed")
        return jsonify({"error": str(e)}), 500


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    app.run(host="0.0.0.0", port=5000)
