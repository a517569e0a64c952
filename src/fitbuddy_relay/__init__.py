"""
FitBuddy relay package.

Provides:
- HTTP relay (FastAPI) forwarding chat and code-explanation prompts to Gemini
- Rule-based local fallback replies when no Gemini key is configured
- Command-line client for the same chat/explain flows
"""
