"""SEO Toolbox - LLM-backed SEO analysis tools with typed fallbacks.

Each tool turns a subject (URL, domain or keyword) into a structured analysis by
prompting a language model, extracting the JSON it returns, validating it, and
substituting synthetic data when any of those steps fail.

Components:
- main_api: FastAPI application exposing one endpoint per tool
- pipeline: prompt -> vendor -> extraction -> fallback orchestration
- llm: prompt templates, vendor clients, JSON extraction
- fallback: schema-driven synthetic result generation
- tools: per-tool result schemas and fallback tables
"""
