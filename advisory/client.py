import logging
import re
from typing import Callable, Optional

from crewai import LLM, Crew, Process, Task

from advisory.agents import (
    HIRING_ASSISTANT_INSTRUCTION,
    get_auditor_agent,
    get_estimator_agent,
    get_explainer_agent,
    get_recruiter_agent,
)
from advisory.configs.prompts import (
    DEADLINE_ESTIMATE_PROMPT,
    ESCROW_EXPLAINER_PROMPT,
    JOB_DESCRIPTION_PROMPT,
    RESUME_ANALYSIS_PROMPT,
    SUBMISSION_AUDIT_PROMPT,
)

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini/gemini-2.0-flash"
DEFAULT_DEADLINE_DAYS = 14

APPROVED_VERDICT = "RECOMMENDED FOR PAYMENT"
REVISION_VERDICT = "REVISIONS NEEDED"

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


class AdvisoryError(Exception):
    """Raised when the generative-text service call fails."""


def is_recommended(audit: Optional[str]) -> bool:
    """Audit verdicts are free text; approval is the presence of the approval phrase."""
    return bool(audit) and APPROVED_VERDICT in audit


def parse_days(text: Optional[str], default: int = DEFAULT_DEADLINE_DAYS) -> int:
    """
    Read the leading integer of an estimator reply.

    Args:
        text (Optional[str]): Raw model reply, e.g. "7" or "10 days".
        default (int): Value used when no integer leads the reply.

    Returns:
        int: Day count.
    """
    if not text:
        return default
    match = _LEADING_INT.match(text)
    if not match:
        return default
    return int(match.group(1))


def strip_data_url(payload: str) -> str:
    if payload.startswith("data:") and "," in payload:
        return payload.split(",", 1)[1]
    return payload


class AdvisoryClient:
    """Stateless calls to the generative-text service.

    Every call is a single request with no retry and no caching. Failures are
    raised as AdvisoryError for the caller to surface.
    """

    def __init__(self, model: str = DEFAULT_MODEL, api_key: Optional[str] = None,
                 llm_factory: Optional[Callable[..., LLM]] = None,
                 default_deadline_days: int = DEFAULT_DEADLINE_DAYS):
        self.model = model
        self.api_key = api_key
        self.default_deadline_days = default_deadline_days
        self._llm_factory = llm_factory or self._build_llm

    def _build_llm(self, temperature: Optional[float] = None) -> LLM:
        kwargs = {"model": self.model}
        if temperature is not None:
            kwargs["temperature"] = temperature
        if self.api_key:
            kwargs["api_key"] = self.api_key
        return LLM(**kwargs)

    def _kickoff(self, agent, description: str, expected_output: str) -> str:
        task = Task(
            description=description,
            expected_output=expected_output,
            agent=agent
        )
        crew = Crew(
            agents=[agent],
            tasks=[task],
            verbose=False,
            process=Process.sequential
        )
        try:
            result = crew.kickoff()
        except Exception as e:
            logger.error(f"Advisory call failed: {e}")
            raise AdvisoryError(str(e)) from e
        result_text = result.raw if hasattr(result, 'raw') else str(result)
        return (result_text or "").strip()

    def generate_job_description(self, prompt: str) -> str:
        """Polish a rough client request into a job post."""
        agent = get_recruiter_agent(self._llm_factory(temperature=0.7))
        text = self._kickoff(
            agent,
            JOB_DESCRIPTION_PROMPT.format(prompt=prompt),
            "A professional job description"
        )
        return text or "Failed to generate description."

    def analyze_resume(self, job_description: str, resume_base64: str) -> str:
        """
        Score a resume (PDF, base64 or data URL) against a job description.

        Returns:
            str: Match score, strengths and gaps as free text.
        """
        llm = self._llm_factory()
        messages = [
            {"role": "system", "content": HIRING_ASSISTANT_INSTRUCTION},
            {
                "role": "user",
                "content": [
                    {
                        "type": "file",
                        "file": {"file_data": f"data:application/pdf;base64,{strip_data_url(resume_base64)}"},
                    },
                    {"type": "text", "text": RESUME_ANALYSIS_PROMPT.format(description=job_description)},
                ],
            },
        ]
        try:
            text = llm.call(messages)
        except Exception as e:
            logger.error(f"Resume analysis failed: {e}")
            raise AdvisoryError(str(e)) from e
        return (text or "").strip() or "Resume analysis unavailable."

    def estimate_deadline(self, job_description: str, proposal_message: str) -> int:
        agent = get_estimator_agent(self._llm_factory(temperature=0.3))
        text = self._kickoff(
            agent,
            DEADLINE_ESTIMATE_PROMPT.format(description=job_description, proposal=proposal_message),
            "A single integer number of days"
        )
        days = parse_days(text, self.default_deadline_days)
        logger.info(f"Deadline estimate: {days} days (reply {text!r})")
        return days

    def audit_submission(self, job_description: str, url: str) -> str:
        agent = get_auditor_agent(self._llm_factory())
        text = self._kickoff(
            agent,
            SUBMISSION_AUDIT_PROMPT.format(
                description=job_description,
                url=url,
                approved=APPROVED_VERDICT,
                revise=REVISION_VERDICT
            ),
            f"A verdict ('{APPROVED_VERDICT}' or '{REVISION_VERDICT}') and 2 observations"
        )
        return text or "Audit service currently offline."

    def explain_escrow(self) -> str:
        agent = get_explainer_agent(self._llm_factory())
        text = self._kickoff(agent, ESCROW_EXPLAINER_PROMPT, "A short plain-language explanation")
        return text or "Explanation unavailable."
