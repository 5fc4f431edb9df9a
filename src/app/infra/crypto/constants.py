"""Constantes criptográficas para WhatsApp Flows."""

AES_KEY_SIZE = 16  # 128 bits (AES-128-GCM)
IV_SIZE = 16  # 128 bits, enviado pela Meta em initial_vector
TAG_SIZE = 16  # 128 bits, anexado ao final do ciphertext
RSA_KEY_SIZE = 2048
RSA_PUBLIC_EXPONENT = 65537
MIN_PASSPHRASE_LENGTH = 8

SIGNATURE_HEADER = "x-hub-signature-256"
SIGNATURE_PREFIX = "sha256="

ENCRYPTED_ENVELOPE_FIELDS = ("encrypted_aes_key", "encrypted_flow_data", "initial_vector")
