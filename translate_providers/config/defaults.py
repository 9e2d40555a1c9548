"""translate_providers.config.defaults
==================================

Central place for small, stable default values used across the
translate_providers package and the thin service layer. These defaults can be
overridden via environment variables or an external configuration file, but
provide sensible fallbacks for local development and tests.

Only plain constants live here; the module imports nothing from the package
to avoid circular dependencies.
"""

from __future__ import annotations

# ---- Service / HTTP layer ----

# Comma-separated list of allowed origins for the dev server.
TRANSLATE_SERVICE_CORS_DEFAULT_ORIGINS = "*"
TRANSLATE_SERVICE_DEFAULT_HOST = "127.0.0.1"
TRANSLATE_SERVICE_DEFAULT_PORT = 8092
# Default provider when a request body does not name one.
TRANSLATE_DEFAULT_PROVIDER = "openai"


# ---- Provider defaults ----
OPENAI_DEFAULT_MODEL = "gpt-4o-mini"
OPENAI_DEFAULT_BASE_URL = "https://api.openai.com/v1"

GEMINI_DEFAULT_MODEL = "gemini-2.0-flash"
GEMINI_DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
# Native generateContent sampling knobs not exposed through AdapterConfig.
GEMINI_NATIVE_TOP_K = 40
GEMINI_NATIVE_TOP_P = 0.95

DEFAULT_MAX_TOKENS = 4096
DEFAULT_TEMPERATURE = 0.3


# ---- Prompting ----
DEFAULT_TARGET_LANGUAGE = "English"

# Full instruction used when the caller supplies no system message.
TRANSLATION_SYSTEM_TEMPLATE = (
    "You are a professional {lang} native translator who needs to fluently translate text into {lang}.\n"
    "\n"
    "## Translation Rules\n"
    "1. Output only the translated content, without explanations or additional content "
    "(such as \"Here's the translation:\" or \"Translation as follows:\")\n"
    "2. The returned translation must maintain exactly the same number of paragraphs and format "
    "as the original text\n"
    "3. If the text contains HTML tags, consider where the tags should be placed in the translation "
    "while maintaining fluency\n"
    "4. For content that should not be translated (such as proper nouns, code, etc.), keep the original text.\n"
    "5. If input contains %%, use %% in your output, if input has no %%, don't use %% in your output\n"
    "\n"
    "## OUTPUT FORMAT:\n"
    "- **Single paragraph input** → Output translation directly (no separators, no extra text)\n"
    "- **Multi-paragraph input** → Use line break as paragraph separator between translations"
)

# Short system role message for chat-completions style endpoints.
TRANSLATION_SYSTEM_ROLE_TEMPLATE = "You are a professional {lang} native translator."


# ---- Streaming ----
# Gap between two deltas (ms) above which an upstream counts as really streaming.
REAL_STREAM_THRESHOLD_MS = 50.0
# Texts shorter than this are emitted as one simulated piece.
SIMULATOR_MIN_CHUNK_CHARS = 50
# Sentence splitting only applies to texts longer than this.
SIMULATOR_SENTENCE_MIN_CHARS = 200
SIMULATOR_MIN_WORDS = 5
SIMULATOR_MAX_WORDS = 15
# Inter-piece delay range in seconds.
SIMULATOR_DELAY_MIN_SECONDS = 0.08
SIMULATOR_DELAY_MAX_SECONDS = 0.12


__all__ = [
    "TRANSLATE_SERVICE_CORS_DEFAULT_ORIGINS",
    "TRANSLATE_SERVICE_DEFAULT_HOST",
    "TRANSLATE_SERVICE_DEFAULT_PORT",
    "TRANSLATE_DEFAULT_PROVIDER",
    "OPENAI_DEFAULT_MODEL",
    "OPENAI_DEFAULT_BASE_URL",
    "GEMINI_DEFAULT_MODEL",
    "GEMINI_DEFAULT_BASE_URL",
    "GEMINI_NATIVE_TOP_K",
    "GEMINI_NATIVE_TOP_P",
    "DEFAULT_MAX_TOKENS",
    "DEFAULT_TEMPERATURE",
    "DEFAULT_TARGET_LANGUAGE",
    "TRANSLATION_SYSTEM_TEMPLATE",
    "TRANSLATION_SYSTEM_ROLE_TEMPLATE",
    "REAL_STREAM_THRESHOLD_MS",
    "SIMULATOR_MIN_CHUNK_CHARS",
    "SIMULATOR_SENTENCE_MIN_CHARS",
    "SIMULATOR_MIN_WORDS",
    "SIMULATOR_MAX_WORDS",
    "SIMULATOR_DELAY_MIN_SECONDS",
    "SIMULATOR_DELAY_MAX_SECONDS",
]
