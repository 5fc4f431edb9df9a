"""Erros de criptografia para WhatsApp Flows.

Cada erro carrega um `kind` para que a camada de processamento decida o
status HTTP sem depender da hierarquia de exceções.
"""

from __future__ import annotations

from enum import StrEnum


class FlowErrorKind(StrEnum):
    """Categoria de falha do endpoint de Flows."""

    VERIFICATION = "verification"
    PARSE = "parse"
    KEY_MISMATCH = "key_mismatch"
    DECRYPTION = "decryption"
    ENCRYPTION = "encryption"
    CONFIGURATION = "configuration"


class FlowCryptoError(Exception):
    """Erro em operação criptográfica de Flow."""

    kind: FlowErrorKind = FlowErrorKind.DECRYPTION


class FlowPayloadError(FlowCryptoError):
    """Envelope criptografado ausente, incompleto ou com base64 inválido."""

    kind = FlowErrorKind.PARSE


class FlowKeyMismatchError(FlowCryptoError):
    """Chave privada inválida ou incompatível com a chave AES recebida.

    A Meta trata o status correspondente (421) como sinal para baixar
    novamente a chave pública do negócio.
    """

    kind = FlowErrorKind.KEY_MISMATCH


class FlowDecryptionError(FlowCryptoError):
    """Falha no AES-GCM (tag inválida) ou plaintext que não é objeto JSON."""

    kind = FlowErrorKind.DECRYPTION


class FlowEncryptionError(FlowCryptoError):
    """Falha ao criptografar a resposta do Flow."""

    kind = FlowErrorKind.ENCRYPTION
