"""Rotas HTTP do canal WhatsApp."""
