"""Configuração do pytest para o projeto wa-webhook-engine."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

# Adiciona src/ ao PYTHONPATH para permitir imports absolutos
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))


@pytest.fixture(scope="session")
def flow_rsa_key() -> rsa.RSAPrivateKey:
    """Chave RSA-2048 compartilhada pela sessão (geração é lenta)."""
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def flow_private_pem(flow_rsa_key: rsa.RSAPrivateKey) -> str:
    return flow_rsa_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode("utf-8")


@pytest.fixture(scope="session")
def flow_public_key(flow_rsa_key: rsa.RSAPrivateKey) -> rsa.RSAPublicKey:
    return flow_rsa_key.public_key()
