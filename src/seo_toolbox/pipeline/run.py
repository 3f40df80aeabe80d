"""Analysis pipeline: prompt -> vendor -> extraction -> validation, with fallback.

One pass per request and no state between passes. Bad input and a missing
credential are raised to the caller; every later failure is absorbed and
answered with a synthetic result tagged source="fallback".
"""

import random
from typing import Any, Callable, Dict, Optional

from ..errors import ConfigurationError, ExtractionError
from ..llm.client import VendorType, create_vendor
from ..llm.extract import extract_json_strict
from ..log import get_logger
from ..schemas.requests import AnalysisResult
from ..tools.base import Tool

class Pipeline:
    def __init__(self, vendor_factory: Callable = create_vendor, rng: Optional[random.Random] = None):
        self.vendor_factory = vendor_factory
        self.rng = rng

    def run(
        self,
        tool: Tool,
        subject: Optional[str],
        vendor: VendorType,
        credential: Optional[str],
        params: Optional[Dict[str, Any]] = None,
        timeout: Optional[float] = None,
    ) -> AnalysisResult:
        try:
            vendor = VendorType(vendor)
        except ValueError:
            raise ConfigurationError(f"Unsupported vendor type: {vendor}") from None

        # 1. Validate input (InputError propagates, nothing to analyze)
        ctx = tool.build_context(subject, params)

        # 2. Credential precondition, checked before any network call
        if not credential or not credential.strip():
            raise ConfigurationError(f"{vendor.value.upper()} API key not configured")

        log = get_logger("pipeline", tool=tool.name, vendor=vendor.value)
        log.info(f"Analyzing {ctx['subject']!r}")

        # 3. Build prompt
        prompt = tool.build_prompt(ctx)

        # 4. Call vendor once
        try:
            backend = self.vendor_factory(vendor.value, timeout)
            raw = backend.generate(prompt, credential)
        except Exception as e:
            log.warning(f"Vendor call failed, using fallback ({e})")
            return self._fallback(tool, vendor, ctx, log)

        # 5-6. Extract and validate
        try:
            data = tool.validate(extract_json_strict(raw))
        except ExtractionError as e:
            log.warning(f"{e}; using fallback")
            return self._fallback(tool, vendor, ctx, log)

        log.info("Returning generated result")
        return AnalysisResult(tool=tool.name, vendor=vendor, source="generated", data=data)

    def _fallback(self, tool: Tool, vendor: VendorType, ctx: Dict[str, Any], log) -> AnalysisResult:
        data = tool.fallback(ctx, self.rng)
        log.info("Returning fallback result")
        return AnalysisResult(tool=tool.name, vendor=vendor, source="fallback", data=data)

pipeline = Pipeline()
