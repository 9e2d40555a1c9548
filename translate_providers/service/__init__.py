"""HTTP service wiring (FastAPI) for the translation adapters.

Import ``translate_providers.service.app`` for the application object; the
package itself stays import-light so library users never pull in FastAPI.
"""
