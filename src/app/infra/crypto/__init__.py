"""Módulo de criptografia para WhatsApp Flows.

Implementa o contrato híbrido RSA/AES da Meta:
- assinatura HMAC-SHA256 do corpo bruto
- unwrap da chave AES com RSA-OAEP/SHA-256
- AES-128-GCM para request e response (IV invertido na resposta)
"""

from .constants import AES_KEY_SIZE, IV_SIZE, SIGNATURE_HEADER, TAG_SIZE
from .errors import (
    FlowCryptoError,
    FlowDecryptionError,
    FlowEncryptionError,
    FlowErrorKind,
    FlowKeyMismatchError,
    FlowPayloadError,
)
from .flow_encryption import (
    DecryptedFlowRequest,
    FlowDecryptOutcome,
    decrypt_flow_data,
    decrypt_flow_envelope,
    decrypt_flow_request,
    encrypt_flow_response,
    flip_iv,
    parse_encrypted_envelope,
)
from .keys import EncryptionKeyPair, decrypt_aes_key, generate_key_pair, load_private_key
from .signature import generate_signature, verify_signature

__all__ = [
    "AES_KEY_SIZE",
    "IV_SIZE",
    "SIGNATURE_HEADER",
    "TAG_SIZE",
    "DecryptedFlowRequest",
    "EncryptionKeyPair",
    "FlowCryptoError",
    "FlowDecryptOutcome",
    "FlowDecryptionError",
    "FlowEncryptionError",
    "FlowErrorKind",
    "FlowKeyMismatchError",
    "FlowPayloadError",
    "decrypt_aes_key",
    "decrypt_flow_data",
    "decrypt_flow_envelope",
    "decrypt_flow_request",
    "encrypt_flow_response",
    "flip_iv",
    "generate_key_pair",
    "generate_signature",
    "load_private_key",
    "parse_encrypted_envelope",
    "verify_signature",
]
