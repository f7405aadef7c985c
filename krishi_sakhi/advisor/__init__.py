"""Response Orchestration Layer for the Krishi Sakhi advisor.

Turns a farmer's utterance into a single language-matched Gemini request:
  - Throttle Gate (minimum spacing between accepted requests)
  - Language Detector (script-range classification)
  - Prompt Composer (persona + strict-language directive + utterance)
  - Completion Dispatcher (ordered model fallback + failure classification)

Callers use ``advise()`` / ``is_configured()`` from ``krishi_sakhi.advisor.service``.
"""
