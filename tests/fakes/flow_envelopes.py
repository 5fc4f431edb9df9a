"""Construção de envelopes de Flow criptografados como a Meta envia."""

from __future__ import annotations

import base64
import hashlib
import hmac
import json
import os
from dataclasses import dataclass
from typing import Any

from cryptography.hazmat.primitives.asymmetric import padding
from cryptography.hazmat.primitives.ciphers.aead import AESGCM
from cryptography.hazmat.primitives.hashes import SHA256


@dataclass(frozen=True)
class EncryptedEnvelope:
    """Envelope pronto para POST e o material para abrir a resposta."""

    body: bytes
    aes_key: bytes
    iv: bytes
    fields: dict[str, str]


def _b64(value: bytes) -> str:
    return base64.b64encode(value).decode("utf-8")


def build_envelope(
    flow_payload: dict[str, Any] | str,
    public_key: Any,
    *,
    iv_size: int = 16,
) -> EncryptedEnvelope:
    """Criptografa o payload com AES-128-GCM e a chave com RSA-OAEP."""
    aes_key = os.urandom(16)
    iv = os.urandom(iv_size)
    plaintext = (
        flow_payload
        if isinstance(flow_payload, str)
        else json.dumps(flow_payload, separators=(",", ":"), ensure_ascii=False)
    )
    encrypted_flow_data = AESGCM(aes_key).encrypt(iv, plaintext.encode("utf-8"), None)
    encrypted_aes_key = public_key.encrypt(
        aes_key,
        padding.OAEP(mgf=padding.MGF1(algorithm=SHA256()), algorithm=SHA256(), label=None),
    )
    fields = {
        "encrypted_flow_data": _b64(encrypted_flow_data),
        "encrypted_aes_key": _b64(encrypted_aes_key),
        "initial_vector": _b64(iv),
    }
    return EncryptedEnvelope(
        body=json.dumps(fields).encode("utf-8"),
        aes_key=aes_key,
        iv=iv,
        fields=fields,
    )


def corrupt_tag(envelope: EncryptedEnvelope) -> EncryptedEnvelope:
    """Inverte um bit da tag GCM (último byte de encrypted_flow_data)."""
    flow_data = bytearray(base64.b64decode(envelope.fields["encrypted_flow_data"]))
    flow_data[-1] ^= 0x01
    fields = {**envelope.fields, "encrypted_flow_data": _b64(bytes(flow_data))}
    return EncryptedEnvelope(
        body=json.dumps(fields).encode("utf-8"),
        aes_key=envelope.aes_key,
        iv=envelope.iv,
        fields=fields,
    )


def open_response(encrypted_b64: str, envelope: EncryptedEnvelope) -> dict[str, Any]:
    """Descriptografa a resposta com o IV invertido, como o cliente da Meta."""
    flipped_iv = bytes(byte ^ 0xFF for byte in envelope.iv)
    plaintext = AESGCM(envelope.aes_key).decrypt(
        flipped_iv, base64.b64decode(encrypted_b64), None
    )
    return json.loads(plaintext)


def sign(payload: bytes, secret: str) -> str:
    digest = hmac.new(secret.encode("utf-8"), payload, hashlib.sha256).hexdigest()
    return f"sha256={digest}"
