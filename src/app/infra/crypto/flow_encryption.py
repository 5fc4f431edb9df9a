"""Criptografia para endpoint de WhatsApp Flows (data exchange).

Contrato da Meta:
- `encrypted_aes_key`: chave AES-128 criptografada com RSA-OAEP/SHA-256 (base64)
- `initial_vector`: IV do AES-GCM (base64, 16 bytes)
- `encrypted_flow_data`: ciphertext + tag de 16 bytes concatenados (base64)

A resposta usa a mesma chave AES com o IV invertido bit a bit.
"""

from __future__ import annotations

import base64
import json
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from .constants import ENCRYPTED_ENVELOPE_FIELDS, IV_SIZE, TAG_SIZE
from .encoding import decode_base64
from .errors import (
    FlowCryptoError,
    FlowDecryptionError,
    FlowEncryptionError,
    FlowErrorKind,
    FlowPayloadError,
)
from .keys import decrypt_aes_key


@dataclass(frozen=True, slots=True)
class DecryptedFlowRequest:
    """Payload descriptografado + material para resposta criptografada."""

    payload: dict[str, Any]
    aes_key: bytes
    iv: bytes


@dataclass(frozen=True, slots=True)
class FlowDecryptOutcome:
    """Resultado etiquetado da descriptografia (ok ou categoria de erro)."""

    request: DecryptedFlowRequest | None = None
    error_kind: FlowErrorKind | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.request is not None and self.error_kind is None


def flip_iv(iv: bytes) -> bytes:
    """Inverte cada bit do IV (XOR 0xFF), como exige a resposta do Flow."""
    return bytes(byte ^ 0xFF for byte in iv)


def parse_encrypted_envelope(raw_body: bytes | str) -> dict[str, str]:
    """Extrai os três campos obrigatórios do envelope criptografado.

    Raises:
        FlowPayloadError: Se o corpo não for um objeto JSON com os campos
            `encrypted_aes_key`, `encrypted_flow_data` e `initial_vector`.
    """
    try:
        text = raw_body.decode("utf-8") if isinstance(raw_body, bytes) else raw_body
        payload = json.loads(text)
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise FlowPayloadError("invalid_json") from exc
    if not isinstance(payload, dict):
        raise FlowPayloadError("payload_not_object")
    return validate_envelope(payload)


def validate_envelope(payload: Mapping[str, Any]) -> dict[str, str]:
    """Garante que os campos de criptografia estão presentes e não vazios."""
    missing = [
        name
        for name in ENCRYPTED_ENVELOPE_FIELDS
        if not isinstance(payload.get(name), str) or not payload.get(name)
    ]
    if missing:
        raise FlowPayloadError(
            f"Missing required encryption properties: {', '.join(missing)}"
        )
    return {name: payload[name] for name in ENCRYPTED_ENVELOPE_FIELDS}


def decode_initial_vector(initial_vector_b64: str) -> bytes:
    """Decodifica `initial_vector` e exige exatamente 16 bytes.

    Raises:
        FlowPayloadError: Base64 inválido ou tamanho diferente de IV_SIZE
    """
    iv = decode_base64(initial_vector_b64, "initial_vector")
    if len(iv) != IV_SIZE:
        raise FlowPayloadError(f"initial_vector must be {IV_SIZE} bytes, got {len(iv)}")
    return iv


def decrypt_flow_data(
    encrypted_flow_data_b64: str,
    aes_key: bytes,
    initial_vector_b64: str,
) -> str:
    """Descriptografa `encrypted_flow_data` com AES-128-GCM.

    Os últimos 16 bytes são a tag de autenticação; o restante é o ciphertext.

    Returns:
        Plaintext UTF-8 (JSON)

    Raises:
        FlowPayloadError: Base64 inválido ou IV fora do tamanho
        FlowDecryptionError: Se a tag não conferir (payload adulterado)
    """
    flow_data = decode_base64(encrypted_flow_data_b64, "encrypted_flow_data")
    iv = decode_initial_vector(initial_vector_b64)
    return _decrypt_gcm(flow_data, aes_key, iv)


def _decrypt_gcm(flow_data: bytes, aes_key: bytes, iv: bytes) -> str:
    if len(flow_data) < TAG_SIZE:
        raise FlowDecryptionError("Encrypted flow data shorter than the GCM tag")

    ciphertext = flow_data[:-TAG_SIZE]
    tag = flow_data[-TAG_SIZE:]
    try:
        decryptor = Cipher(algorithms.AES(aes_key), modes.GCM(iv, tag)).decryptor()
        plaintext = decryptor.update(ciphertext) + decryptor.finalize()
        return plaintext.decode("utf-8")
    except InvalidTag as exc:
        raise FlowDecryptionError("Flow payload authentication tag mismatch") from exc
    except (ValueError, UnicodeDecodeError) as exc:
        raise FlowDecryptionError(f"Flow payload decryption failed: {exc}") from exc


def decrypt_flow_request(
    *,
    encrypted_flow_data_b64: str,
    encrypted_aes_key_b64: str,
    initial_vector_b64: str,
    private_key_pem: str,
    private_key_passphrase: str | None = None,
) -> DecryptedFlowRequest:
    """Descriptografa request completo do endpoint de Flow.

    Raises:
        FlowPayloadError: Base64 inválido ou IV fora do tamanho
        FlowKeyMismatchError: Chave privada inválida ou incompatível
        FlowDecryptionError: Tag inválida ou plaintext que não é objeto JSON
    """
    iv = decode_initial_vector(initial_vector_b64)
    flow_data = decode_base64(encrypted_flow_data_b64, "encrypted_flow_data")

    aes_key = decrypt_aes_key(encrypted_aes_key_b64, private_key_pem, private_key_passphrase)
    plaintext = _decrypt_gcm(flow_data, aes_key, iv)

    try:
        payload = json.loads(plaintext)
    except json.JSONDecodeError as exc:
        raise FlowDecryptionError("Decrypted flow payload is not valid JSON") from exc
    if not isinstance(payload, dict):
        raise FlowDecryptionError("Flow payload must be a JSON object")

    return DecryptedFlowRequest(payload=payload, aes_key=aes_key, iv=iv)


def decrypt_flow_envelope(
    raw_body: bytes | str,
    *,
    private_key_pem: str,
    private_key_passphrase: str | None = None,
) -> FlowDecryptOutcome:
    """Parseia e descriptografa o corpo bruto, sem levantar exceções.

    Returns:
        FlowDecryptOutcome com o request ou com a categoria da falha.
    """
    try:
        envelope = parse_encrypted_envelope(raw_body)
        request = decrypt_flow_request(
            encrypted_flow_data_b64=envelope["encrypted_flow_data"],
            encrypted_aes_key_b64=envelope["encrypted_aes_key"],
            initial_vector_b64=envelope["initial_vector"],
            private_key_pem=private_key_pem,
            private_key_passphrase=private_key_passphrase,
        )
    except FlowCryptoError as exc:
        return FlowDecryptOutcome(error_kind=exc.kind, error=str(exc))
    return FlowDecryptOutcome(request=request)


def encrypt_flow_response(
    *,
    response: Any,
    aes_key: bytes,
    iv: bytes,
) -> str:
    """Criptografa resposta para Flow e retorna base64(ciphertext + tag).

    A Meta espera a resposta criptografada com o IV do request invertido
    (XOR 0xFF), sem associated data, como texto simples em base64.

    Raises:
        FlowEncryptionError: Se a resposta não for serializável ou a cifra falhar
    """
    try:
        plaintext = json.dumps(
            response if response is not None else {},
            ensure_ascii=False,
            separators=(",", ":"),
        ).encode("utf-8")
        encrypted = AESGCM(aes_key).encrypt(flip_iv(iv), plaintext, None)
    except (TypeError, ValueError) as exc:
        raise FlowEncryptionError(f"Flow response encryption failed: {exc}") from exc
    return base64.b64encode(encrypted).decode("utf-8")
