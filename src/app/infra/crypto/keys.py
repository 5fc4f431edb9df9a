"""Operações de chave RSA e AES para Flows."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import padding, rsa
from cryptography.hazmat.primitives.hashes import SHA256

from .constants import (
    AES_KEY_SIZE,
    MIN_PASSPHRASE_LENGTH,
    RSA_KEY_SIZE,
    RSA_PUBLIC_EXPONENT,
)
from .encoding import decode_base64
from .errors import FlowKeyMismatchError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class EncryptionKeyPair:
    """Par de chaves RSA para o endpoint de Flows (PEM)."""

    passphrase: str
    private_key: str
    public_key: str


def normalize_private_pem(private_key_pem: str) -> str:
    """Converte sequências literais `\\n` (comuns em env vars) em quebras de linha."""
    if "\\n" in private_key_pem:
        return private_key_pem.replace("\\n", "\n")
    return private_key_pem


def load_private_key(private_key_pem: str, passphrase: str | None = None) -> Any:
    """Carrega chave privada RSA em formato PEM.

    Args:
        private_key_pem: Chave privada em formato PEM (PKCS#1 ou PKCS#8)
        passphrase: Senha da chave (opcional)

    Returns:
        Objeto de chave privada RSA

    Raises:
        FlowKeyMismatchError: Se a chave não puder ser carregada
    """
    pem_bytes = normalize_private_pem(private_key_pem).encode("utf-8")
    passphrase_bytes = passphrase.encode() if passphrase and passphrase.strip() else None

    def _load(password: bytes | None) -> Any:
        return serialization.load_pem_private_key(pem_bytes, password=password)

    try:
        return _load(passphrase_bytes)
    except Exception as exc:
        # Passphrase injetada por configuração para uma chave sem criptografia
        exc_text = str(exc).lower()
        if passphrase_bytes and "not encrypted" in exc_text:
            try:
                return _load(None)
            except Exception as retry_exc:
                raise FlowKeyMismatchError(f"Invalid private key: {retry_exc}") from retry_exc
        logger.error(
            "flow_private_key_load_failed",
            extra={
                "component": "flow_crypto",
                "error_type": type(exc).__name__,
                "has_passphrase": passphrase_bytes is not None,
            },
        )
        raise FlowKeyMismatchError(f"Invalid private key: {exc}") from exc


def unwrap_aes_key(private_key: Any, encrypted_aes_key: bytes) -> bytes:
    """Descriptografa a chave AES com RSA-OAEP (SHA-256).

    Raises:
        FlowKeyMismatchError: Se a chave privada não corresponder ao ciphertext
    """
    try:
        aes_key = private_key.decrypt(
            encrypted_aes_key,
            padding.OAEP(
                mgf=padding.MGF1(algorithm=SHA256()),
                algorithm=SHA256(),
                label=None,
            ),
        )
    except Exception as exc:
        raise FlowKeyMismatchError(
            "Failed to decrypt the request. Please verify your private key."
        ) from exc

    if len(aes_key) != AES_KEY_SIZE:
        raise FlowKeyMismatchError(f"Invalid AES key size: {len(aes_key)}")
    return aes_key


def decrypt_aes_key(
    encrypted_aes_key_b64: str,
    private_key_pem: str,
    passphrase: str | None = None,
) -> bytes:
    """Carrega a chave privada e recupera a chave AES-128 do request.

    Args:
        encrypted_aes_key_b64: Chave AES criptografada com RSA-OAEP (base64)
        private_key_pem: Chave privada RSA (PEM)
        passphrase: Senha da chave (opcional)

    Returns:
        Chave AES bruta (16 bytes)

    Raises:
        FlowPayloadError: Se o base64 for inválido
        FlowKeyMismatchError: Se a chave privada for inválida ou não corresponder
    """
    encrypted_aes_key = decode_base64(encrypted_aes_key_b64, "encrypted_aes_key")
    private_key = load_private_key(private_key_pem, passphrase)
    return unwrap_aes_key(private_key, encrypted_aes_key)


def generate_key_pair(passphrase: str) -> EncryptionKeyPair:
    """Gera par RSA-2048 para cadastro da chave pública na Meta.

    A chave pública sai em SPKI (PEM) e a privada em PKCS#8 (PEM)
    protegida pela passphrase.

    Raises:
        ValueError: Se a passphrase estiver vazia
    """
    if not passphrase or not passphrase.strip():
        raise ValueError(
            "Passphrase is empty. Please provide a passphrase or set "
            "WHATSAPP_FLOW_PRIVATE_KEY_PASSPHRASE."
        )
    if len(passphrase) < MIN_PASSPHRASE_LENGTH:
        logger.warning(
            "flow_key_passphrase_short",
            extra={"component": "flow_crypto", "min_length": MIN_PASSPHRASE_LENGTH},
        )

    private_key = rsa.generate_private_key(
        public_exponent=RSA_PUBLIC_EXPONENT,
        key_size=RSA_KEY_SIZE,
    )
    private_pem = private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.BestAvailableEncryption(passphrase.encode()),
    ).decode("utf-8")
    public_pem = private_key.public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    ).decode("utf-8")

    logger.info("flow_key_pair_generated", extra={"component": "flow_crypto"})
    return EncryptionKeyPair(
        passphrase=passphrase,
        private_key=private_pem,
        public_key=public_pem,
    )
