import logging
import os

from flask import Flask, jsonify

from tinydb import TinyDB
from tinydb.storages import MemoryStorage

from atms_routes import atms_bp, init_atms_bp


def open_db(path):
    """TinyDB를 연다. ":memory:"이면 메모리 저장소를 쓴다."""
    if path == ":memory:":
        return TinyDB(storage=MemoryStorage)   # Memory DB
    return TinyDB(path)                        # Storage DB


app = Flask(__name__)
app.secret_key = os.environ.get("ATMS_SECRET_KEY", "key")
app.config["ATMS_DB_PATH"] = os.environ.get("ATMS_DB_PATH", "db.json")

DB = open_db(app.config["ATMS_DB_PATH"])
init_atms_bp(DB.table("atms"))
app.register_blueprint(atms_bp)


@app.route("/")
def main():
    return jsonify({
        "service": "atms",
        "endpoints": sorted(
            str(rule) for rule in app.url_map.iter_rules()
            if str(rule).startswith("/atms")
        ),
    })


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    app.run(debug=True)
