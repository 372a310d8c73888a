from datetime import datetime
from typing import Callable

from clock import DEFAULT_TIMEZONE, format_reference_time, reference_now
from completion import CompletionClient
from extractor import extract_record
from guardrail import apply_guardrail, detect_signals
from logging_config import get_logger
from models import ClassifiedRecord
from normalizer import normalize_record
from policies import NormalizationPolicy, get_policy
from prompts import build_prompt

logger = get_logger("classifier")


class Classifier:
    """Text in, one normalized ClassifiedRecord out.

    Holds no per-request state, so one instance serves every request.
    """

    def __init__(
        self,
        completion: CompletionClient,
        policy: NormalizationPolicy = None,
        timezone: str = DEFAULT_TIMEZONE,
        clock: Callable[[str], datetime] = reference_now,
    ):
        self.completion = completion
        self.policy = policy or get_policy()
        self.timezone = timezone
        self.clock = clock

    async def classify(self, text: str) -> ClassifiedRecord:
        now = self.clock(self.timezone)
        system_prompt = build_prompt(text, format_reference_time(now), self.policy, self.timezone)

        raw = await self.completion.complete(system_prompt, text)
        data = extract_record(raw)

        signals = detect_signals(text)
        apply_guardrail(data, signals)

        record = normalize_record(data, text, self.policy, signals, now)
        logger.info(f"Classified as {record.type} (profile={self.policy.name})")
        return record
