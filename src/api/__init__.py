"""API — camada de borda e adapters HTTP.

Responsabilidades:
- Receber requests do webhook WhatsApp e do endpoint de Flows
- Normalizar payloads para modelos internos
- Adaptar frameworks HTTP (Starlette/FastAPI, Flask) ao processador neutro
- Falar com a Graph API (cliente outbound)

Subpastas:
- adapters/: mapeamento framework <-> WebhookRequest/WebhookResult
- connectors/: verificação de webhook e clientes HTTP da Graph API
- normalizers/: conversão de payloads externos → modelos internos
- routes/: endpoints HTTP (webhooks, flows, health)

NÃO PODE conter: dispatch de handlers, regras de Flow, criptografia.
"""
