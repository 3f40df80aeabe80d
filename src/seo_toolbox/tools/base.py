"""Tool definition shared by every analysis endpoint.

A Tool bundles what differs between endpoints: how to read the subject, which
prompt template to render, the result model the vendor output must satisfy, and
the fallback table used when it does not.
"""

from __future__ import annotations

import random
from typing import Any, Dict, Optional, Type
from urllib.parse import urlparse

from pydantic import BaseModel, ValidationError

from ..errors import ExtractionError, InputError
from ..fallback.fields import FieldSpec
from ..fallback.synth import synthesize
from ..llm.prompts import render_prompt


class NoParams(BaseModel):
    pass


class Tool:
    def __init__(
        self,
        name: str,
        description: str,
        subject_kind: str,
        template: str,
        result_model: Type[BaseModel],
        fallback: FieldSpec,
        params_model: Type[BaseModel] = NoParams,
    ):
        if subject_kind not in ("url", "domain", "keyword"):
            raise ValueError(f"Unknown subject kind: {subject_kind}")
        self.name = name
        self.description = description
        self.subject_kind = subject_kind
        self.template = template
        self.result_model = result_model
        self.fallback_spec = fallback
        self.params_model = params_model

    def build_context(self, subject: Optional[str], params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Validate the subject and params and return the values prompts and fallbacks render with.
        Raises InputError; nothing is sent to a vendor for bad input.
        """
        if self.subject_kind == "url":
            ctx = parse_url_subject(subject)
        elif self.subject_kind == "domain":
            ctx = parse_domain_subject(subject)
        else:
            ctx = parse_keyword_subject(subject)

        try:
            parsed = self.params_model.model_validate(params or {})
        except ValidationError as e:
            raise InputError(f"Invalid parameters for {self.name}: {_first_error(e)}") from None
        ctx.update(parsed.model_dump(mode="json"))
        return self.prompt_context(ctx)

    def prompt_context(self, ctx: Dict[str, Any]) -> Dict[str, Any]:
        """Hook for tools that derive extra prompt values from their params."""
        return ctx

    def build_prompt(self, ctx: Dict[str, Any]) -> str:
        return render_prompt(self.template, ctx)

    def validate(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Check parsed vendor output against the result model.
        Returns the data unchanged; shape problems raise ExtractionError.
        """
        try:
            self.result_model.model_validate(data)
        except ValidationError as e:
            raise ExtractionError(f"Response does not match {self.result_model.__name__}: {_first_error(e)}") from e
        return data

    def fallback(self, ctx: Dict[str, Any], rng: Optional[random.Random] = None) -> Dict[str, Any]:
        return synthesize(self.fallback_spec, ctx, rng)


def parse_url_subject(subject: Optional[str]) -> Dict[str, Any]:
    url = (subject or "").strip()
    if not url:
        raise InputError("URL is required")
    try:
        parsed = urlparse(url)
        hostname = parsed.hostname
    except ValueError:
        # Malformed netlocs such as an unclosed IPv6 bracket
        raise InputError("Invalid URL format") from None
    if parsed.scheme not in ("http", "https") or not hostname:
        raise InputError("Invalid URL format")
    domain = _strip_www(hostname)
    return {"subject": url, "url": url, "domain": domain, "stem": domain.split(".")[0]}


def parse_domain_subject(subject: Optional[str]) -> Dict[str, Any]:
    raw = (subject or "").strip()
    if not raw:
        raise InputError("Domain is required")
    if "://" in raw:
        return parse_url_subject(raw)
    host = raw.split("/")[0].lower()
    if "." not in host or " " in host:
        raise InputError("Invalid domain format")
    domain = _strip_www(host)
    return {"subject": raw, "url": f"https://{domain}", "domain": domain, "stem": domain.split(".")[0]}


def parse_keyword_subject(subject: Optional[str]) -> Dict[str, Any]:
    keyword = " ".join((subject or "").split())
    if not keyword:
        raise InputError("Keyword is required")
    return {"subject": keyword, "keyword": keyword, "slug": keyword.lower().replace(" ", "-")}


def _strip_www(host: str) -> str:
    return host[4:] if host.startswith("www.") else host


def _first_error(e: ValidationError) -> str:
    err = e.errors()[0]
    loc = ".".join(str(p) for p in err.get("loc", ())) or "value"
    return f"{loc}: {err.get('msg')}"
