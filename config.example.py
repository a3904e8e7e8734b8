# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
Do NOT commit real secrets; keep them in .env (local, gitignored).
"""

ENV_VARS = {
    # App / logging
    "AUTOPHYS_APP_NAME": "App display name (default: Auto Physics).",
    "AUTOPHYS_LOG_LEVEL": "Console logging level (default: INFO).",
    "AUTOPHYS_DATA_DIR": "Local data directory for logs (default: .local/auto_physics).",
    # Locale
    "AUTOPHYS_LANGUAGE": "Default question language: id or en (default: id).",
    # LLM
    "AUTOPHYS_LLM_API_KEY": "API key for the OpenAI-compatible endpoint (OPENAI_API_KEY also accepted).",
    "AUTOPHYS_LLM_BASE_URL": "Endpoint base URL (default: https://openrouter.ai/api/v1).",
    "AUTOPHYS_LLM_MODELS": "Comma/space separated list of models to try in order.",
    "AUTOPHYS_LLM_TEMPERATURE": "Sampling temperature (default: 0.65).",
    "AUTOPHYS_LLM_TOP_P": "Nucleus sampling (default: 1.0).",
    "AUTOPHYS_LLM_MAX_OUTPUT_TOKENS": "Max tokens per answer (default: 16384).",
    "AUTOPHYS_LLM_FIRST_TOKEN_TIMEOUT_SECONDS": "Give up on a model without first token after N s (default: 45).",
    "AUTOPHYS_LLM_READ_TIMEOUT_SECONDS": "HTTP read timeout (default: 60).",
    "AUTOPHYS_LLM_CONNECT_TIMEOUT_SECONDS": "HTTP connect timeout (default: 5).",
    "AUTOPHYS_HTTP_REFERER": "Optional OpenRouter metadata header.",
    "AUTOPHYS_APP_TITLE": "Optional OpenRouter metadata header title.",
    # Generation
    "AUTOPHYS_GENERATION_MAX_ATTEMPTS": "Attempts per question until a complete row arrives (default: 3).",
    "AUTOPHYS_GENERATION_TIMEOUT_SECONDS": "Per-request deadline, the lane stays held until the LLM call returns; 0 disables (default: 90).",
}
