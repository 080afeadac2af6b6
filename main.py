#!/usr/bin/env python3
"""
Feed Article Sanitizer - HTTP entry point
Cleans untrusted article HTML: strips scripts, foreign iframes and attributes → resolves image URLs → returns safe HTML
"""

import hmac
import os
from datetime import datetime

import functions_framework
import structlog
from pydantic import ValidationError

from feed_sanitizer import SanitizeRequest, SanitizeResponse, sanitize_html
from feed_sanitizer.logging_utils import setup_logging
from feed_sanitizer.settings import (
    CLOUD_RUN_VERIFY_TOKEN,
    SANITIZER_DEFAULT_BASE_URL,
    SANITIZER_LOG_LEVEL,
)

setup_logging(level=SANITIZER_LOG_LEVEL)
logger = structlog.get_logger(__name__)


def run_sanitization(payload):
    """Validate a request payload and sanitize the HTML it carries."""
    sanitize_request = SanitizeRequest.model_validate(payload)
    base_url = sanitize_request.base_url or SANITIZER_DEFAULT_BASE_URL

    safe_html = sanitize_html(sanitize_request.html, base_url)
    logger.info(
        "article_sanitized",
        base_url=base_url,
        input_length=len(sanitize_request.html),
        output_length=len(safe_html),
    )
    return SanitizeResponse(html=safe_html)


# Main Cloud Function endpoint with routing
@functions_framework.http
def main_handler(request):
    """Main HTTP endpoint that routes to different functions based on path"""

    path = request.path.rstrip("/")
    method = request.method

    logger.info("http_request", method=method, path=path, timestamp=datetime.now().isoformat())

    if path == "" or path == "/":
        # Health check
        if method == "GET":
            return {
                "status": "healthy",
                "service": "feed-sanitizer",
                "timestamp": datetime.now().isoformat(),
            }, 200
        else:
            return {"error": "Method not allowed"}, 405

    elif path == "/sanitize":
        if method == "POST":
            return handle_sanitize(request)
        else:
            return {"error": "Method not allowed"}, 405
    else:
        return {"error": "Not found"}, 404


def handle_sanitize(request):
    """Handle a sanitization request"""
    # Optional shared secret in a custom header to avoid conflicting with Cloud Run OIDC Authorization;
    # once configured, requests without it are refused
    provided_token = request.headers.get("X-Verify-Token", "")
    if CLOUD_RUN_VERIFY_TOKEN and not hmac.compare_digest(
        provided_token.encode(), CLOUD_RUN_VERIFY_TOKEN.encode()
    ):
        return {"error": "Unauthorized"}, 401

    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        logger.warning("invalid_sanitize_payload", content_type=request.content_type)
        return {"error": "Expected a JSON object body"}, 400

    try:
        response = run_sanitization(payload)
    except ValidationError as e:
        logger.warning("sanitize_request_rejected", errors=e.error_count())
        return {
            "error": "Invalid request",
            "details": e.errors(include_url=False, include_context=False, include_input=False),
        }, 400
    except Exception as e:
        logger.exception("sanitization_failure", error=str(e))
        return {"error": f"Sanitization failed: {str(e)}"}, 500

    return response.model_dump(), 200


def main():
    """Main function with interactive mode selection."""
    print("🧼 Feed Article Sanitizer")
    print("=" * 50)
    print("Commands:")
    print("  'sanitize' - Sanitize an HTML fragment")
    print("  'quit'     - Exit")
    print("=" * 50)

    while True:
        try:
            command = input("\n💬 Enter command (sanitize/quit): ").strip().lower()

            if command == "quit":
                print("👋 Goodbye!")
                break

            elif command == "sanitize":
                base_url = input("🌐 Feed website URL: ").strip() or SANITIZER_DEFAULT_BASE_URL
                html = input("📄 HTML: ")
                print("\n" + sanitize_html(html, base_url))

            else:
                print("❓ Unknown command. Please use 'sanitize' or 'quit'.")

        except KeyboardInterrupt:
            print("\n\n👋 Goodbye!")
            break
        except Exception as e:
            print(f"\n❌ An error occurred: {e}")


if __name__ == "__main__":
    # Check if running in Cloud Functions/Cloud Run (has PORT environment variable)
    if os.getenv("PORT") or os.getenv("FUNCTION_TARGET"):
        # Running in cloud environment - the functions framework will handle HTTP requests
        print("🌐 Running in cloud environment (Functions Framework)")
    else:
        # Running locally - start interactive mode
        main()
