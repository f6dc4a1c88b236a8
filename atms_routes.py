"""
ATMS Flask Blueprint: 서명/명단/증명 엔드포인트
==================================================

  | 메서드 | 경로                  | 설명                               |
  |--------|-----------------------|------------------------------------|
  | POST   | /atms/keys/derive     | 비밀키(64B) → 공개키(32B)          |
  | POST   | /atms/eddsa/sign      | 바이트 메시지 EdDSA 서명           |
  | POST   | /atms/eddsa/verify    | EdDSA 서명 검증                    |
  | POST   | /atms/schnorr/sign    | FR 메시지 Schnorr 서명 (ATMS용)    |
  | POST   | /atms/roster          | 공개키 명단 등록 + 커밋먼트        |
  | GET    | /atms/roster          | 등록된 명단 조회                   |
  | POST   | /atms/roster/clear    | 명단 삭제                          |
  | POST   | /atms/prove           | 명단에 대한 ATMS 회로 만족 여부    |

바이트는 hex, FR 원소는 10진 문자열로 주고받는다.
인코딩 오류와 잘못된 요청은 400 {"error": ...}로 응답한다.
"""

import logging

from flask import Blueprint, abort, jsonify, request
from tinydb import Query
from werkzeug.exceptions import BadRequest

from atms import bindings
from atms.encoding import decode_private_key
from atms.errors import EncodingError
from atms.field import FR_MODULUS
from atms.jubjub import GENERATOR, multiply
from atms.proof import check, commit_roster
from atms.signatures.schnorr import Schnorr

from atms_serializers import (
    serialize_fr, deserialize_fr,
    from_hex,
    serialize_pk, serialize_pk_list, deserialize_pk_list,
    serialize_signature, deserialize_signature,
)


logger = logging.getLogger(__name__)

atms_bp = Blueprint('atms', __name__, url_prefix='/atms')

DATA = Query()

# DB는 app.py에서 주입
DB = None


def init_atms_bp(db):
    """app.py에서 DB를 주입받는다."""
    global DB
    DB = db


# ─── DB 헬퍼 ───

def db_get(key):
    """DB에서 키로 데이터를 조회한다."""
    result = DB.search(DATA.type == key)
    if not result:
        return None
    return result[0].get("data")


def db_set(key, data):
    """DB에 키로 데이터를 저장한다."""
    DB.upsert({"type": key, "data": data}, DATA.type == key)


def db_remove(key):
    """DB에서 키를 삭제한다."""
    DB.remove(DATA.type == key)


# ─── 요청 헬퍼 ───

def get_field(data, name):
    """JSON 본문에서 필수 필드를 꺼낸다."""
    if name not in data:
        abort(400, description=f"필수 필드가 없습니다: {name}")
    return data[name]


def get_json():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        abort(400, description="JSON 객체 본문이 필요합니다")
    return data


@atms_bp.errorhandler(EncodingError)
def handle_encoding_error(err):
    logger.info("rejected request: %s", err)
    return jsonify({"error": str(err)}), 400


@atms_bp.errorhandler(BadRequest)
def handle_bad_request(err):
    return jsonify({"error": err.description}), 400


# ──────────────────────────────────────────────────────────────
# 키 / 서명
# ──────────────────────────────────────────────────────────────

@atms_bp.route("/keys/derive", methods=["POST"])
def keys_derive():
    """비밀키로부터 공개키를 유도한다."""
    data = get_json()
    pk = bindings.derive_public_key(from_hex(get_field(data, "private_key")))
    return jsonify({"public_key": pk.hex()})


@atms_bp.route("/eddsa/sign", methods=["POST"])
def eddsa_sign():
    data = get_json()
    signature = bindings.sign(
        from_hex(get_field(data, "message")),
        from_hex(get_field(data, "private_key")),
    )
    return jsonify({"signature": signature.hex()})


@atms_bp.route("/eddsa/verify", methods=["POST"])
def eddsa_verify():
    data = get_json()
    valid = bindings.verify(
        from_hex(get_field(data, "message")),
        from_hex(get_field(data, "signature")),
        from_hex(get_field(data, "public_key")),
    )
    return jsonify({"valid": valid})


@atms_bp.route("/schnorr/sign", methods=["POST"])
def schnorr_sign():
    """FR 메시지에 Schnorr 서명한다 (ATMS 슬롯에 넣을 서명)."""
    data = get_json()
    msg = deserialize_fr(get_field(data, "message"))
    sk = decode_private_key(from_hex(get_field(data, "private_key")))
    pk = multiply(GENERATOR, sk)
    sig = Schnorr.sign((sk, pk), msg)
    return jsonify({
        "signature": serialize_signature(sig),
        "public_key": serialize_pk(pk),
    })


# ──────────────────────────────────────────────────────────────
# 명단
# ──────────────────────────────────────────────────────────────

@atms_bp.route("/roster", methods=["POST"])
def roster_register():
    """공개키 명단을 등록하고 커밋먼트를 계산한다."""
    data = get_json()
    raw = get_field(data, "public_keys")
    if not isinstance(raw, list) or not raw:
        abort(400, description="public_keys는 비어 있지 않은 리스트여야 합니다")
    pks = deserialize_pk_list(raw)
    commitment = serialize_fr(commit_roster(pks))

    db_set("atms.roster", {"public_keys": serialize_pk_list(pks), "commitment": commitment})
    logger.info("registered roster of %d keys", len(pks))
    return jsonify({"size": len(pks), "commitment": commitment})


@atms_bp.route("/roster", methods=["GET"])
def roster_get():
    roster = db_get("atms.roster")
    if roster is None:
        return jsonify({"error": "등록된 명단이 없습니다"}), 404
    return jsonify(roster)


@atms_bp.route("/roster/clear", methods=["POST"])
def roster_clear():
    db_remove("atms.roster")
    return jsonify({"cleared": True})


# ──────────────────────────────────────────────────────────────
# 증명
# ──────────────────────────────────────────────────────────────

@atms_bp.route("/prove", methods=["POST"])
def prove():
    """등록된 명단에 대해 ATMS 회로 만족 여부를 확인한다."""
    roster = db_get("atms.roster")
    if roster is None:
        abort(400, description="먼저 명단을 등록하세요")

    data = get_json()
    msg = deserialize_fr(get_field(data, "message"))
    threshold = get_field(data, "threshold")
    # JSON true/false는 bool이지만 int의 하위 클래스다
    if isinstance(threshold, bool) or not isinstance(threshold, int):
        abort(400, description="threshold는 정수여야 합니다")
    if not 0 <= threshold < FR_MODULUS:
        abort(400, description="threshold는 0 이상 r 미만의 정수여야 합니다")
    signatures = get_field(data, "signatures")
    pks = deserialize_pk_list(roster["public_keys"])
    if not isinstance(signatures, list) or len(signatures) != len(pks):
        abort(400, description=f"signatures는 길이 {len(pks)}의 리스트여야 합니다")

    failures = check(
        pks,
        [deserialize_signature(s) for s in signatures],
        deserialize_fr(roster["commitment"]),
        msg,
        threshold,
    )
    return jsonify({
        "satisfied": not failures,
        "failures": [repr(f) for f in failures[:20]],
    })
