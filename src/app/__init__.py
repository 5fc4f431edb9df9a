"""App — coração do sistema: orquestração, casos de uso e infraestrutura.

Subpastas:
- bootstrap/: composition root (factories, inicialização, wiring)
- coordinators/: registry de handlers, dispatcher e classificação de Flows
- use_cases/: processador de webhooks (verificação, eventos, Flows)
- domain/: modelos canônicos (mensagens, status, requests de Flow)
- infra/: implementações concretas de IO (criptografia)
- protocols/: contratos/interfaces
- observability/: correlation id e contexto de logs

Padrão: app executa; api adapta; config configura.
"""
