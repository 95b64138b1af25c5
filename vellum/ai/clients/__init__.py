# vellum/ai/clients/__init__.py
# Provider clients (Ollama)
