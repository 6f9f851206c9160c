"""LLM-generated match explanations.

Uses OpenAI chat completions to write a short, encouraging paragraph on why
a scholarship suits a student. SDK failures are translated into the
``ProviderError`` family so callers never depend on OpenAI exception types.
"""

import logging
from typing import List, Optional, Protocol

import openai
from openai import AsyncOpenAI

from scholarmatch.config import Settings
from scholarmatch.errors import (
    ProviderError,
    ProviderRateLimitedError,
    ProviderUnauthorizedError,
    ProviderUnavailableError,
)
from scholarmatch.matching.reasons import format_number
from scholarmatch.matching.requirements import ScholarshipProfile
from scholarmatch.profile.models import StudentProfile

logger = logging.getLogger(__name__)

EMPTY_COMPLETION_TEXT = "Explanation could not be generated."

# System prompt for explanation generation
SYSTEM_PROMPT = (
    "You are a helpful scholarship advisor who writes personalized, encouraging "
    "explanations for why scholarships match students. Keep responses to 2-3 "
    "sentences and reference specific student qualifications."
)


class ExplanationProvider(Protocol):
    async def generate_explanation(
        self, student: StudentProfile, scholarship: ScholarshipProfile
    ) -> str:
        ...


def build_prompt(student: StudentProfile, scholarship: ScholarshipProfile) -> str:
    """Build the user prompt from student and scholarship details."""
    student_details: List[str] = [
        f"Student: {student.name}",
        f"GPA: {format_number(student.gpa)}",
    ]
    if student.major:
        student_details.append(f"Major: {student.major}")
    student_details.append(f"Enrollment Status: {student.enrollment_status}")
    if student.first_generation:
        student_details.append("First-generation college student")
    if student.financial_need:
        student_details.append("Demonstrates financial need")
    if student.gender:
        student_details.append(f"Gender: {student.gender}")
    if student.residency:
        student_details.append(f"Residency: {student.residency}")
    if student.ethnicity:
        student_details.append(f"Ethnicity: {', '.join(sorted(student.ethnicity))}")
    if student.military_affiliation:
        student_details.append(f"Military affiliation: {student.military_affiliation}")
    if student.community_service_hours:
        student_details.append(f"Community service: {student.community_service_hours} hours")

    scholarship_details: List[str] = [
        f"Scholarship: {scholarship.name}",
        f"Amount: ${scholarship.amount:,}",
        f"Provider: {scholarship.provider}",
        f"Minimum GPA: {format_number(scholarship.gpa_minimum)}",
    ]
    if scholarship.first_generation.is_constrained:
        scholarship_details.append(
            f"First-generation required: {str(scholarship.first_generation.to_nullable()).lower()}"
        )
    if scholarship.financial_need.is_constrained:
        scholarship_details.append(
            f"Financial need required: {str(scholarship.financial_need.to_nullable()).lower()}"
        )
    if scholarship.gender.is_constrained:
        scholarship_details.append(f"Gender requirement: {scholarship.gender.value}")

    student_block = "\n".join(student_details)
    scholarship_block = "\n".join(scholarship_details)
    return (
        f'Explain why the "{scholarship.name}" scholarship is a good match for this student:\n\n'
        f"Student Qualifications:\n{student_block}\n\n"
        f"Scholarship Details:\n{scholarship_block}\n\n"
        "Write an encouraging 2-3 sentence explanation that references specific "
        "student qualifications and explains why this scholarship is a good fit."
    )


class OpenAIExplanationProvider:
    """Generates explanations with the OpenAI chat completions API."""

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        client: Optional[AsyncOpenAI] = None,
    ):
        """Initialize the provider.

        Args:
            api_key: OpenAI API key
            model: Chat model name
            client: Pre-built client, mainly for tests
        """
        self.client = client or AsyncOpenAI(api_key=api_key)
        self.model = model

    async def generate_explanation(
        self, student: StudentProfile, scholarship: ScholarshipProfile
    ) -> str:
        """Generate a 2-3 sentence explanation for one match.

        Raises:
            ProviderUnauthorizedError: Invalid API key
            ProviderRateLimitedError: Rate limit exceeded
            ProviderUnavailableError: Service unreachable or returning 503
            ProviderError: Any other failure
        """
        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": build_prompt(student, scholarship)},
                ],
                max_tokens=150,
                temperature=0.7,
            )
        except openai.AuthenticationError as e:
            raise ProviderUnauthorizedError("Invalid OpenAI API key") from e
        except openai.RateLimitError as e:
            raise ProviderRateLimitedError("OpenAI API rate limit exceeded") from e
        except openai.APIConnectionError as e:
            raise ProviderUnavailableError("OpenAI API could not be reached") from e
        except openai.APIStatusError as e:
            if e.status_code == 503:
                raise ProviderUnavailableError("OpenAI API is temporarily unavailable") from e
            raise ProviderError(f"Failed to generate explanation: {e}") from e
        except openai.OpenAIError as e:
            raise ProviderError(f"Failed to generate explanation: {e}") from e

        content = response.choices[0].message.content if response.choices else None
        text = (content or "").strip()
        if not text:
            logger.warning(f"Empty completion for scholarship {scholarship.id}")
            return EMPTY_COMPLETION_TEXT
        return text


def build_explanation_provider(settings: Settings) -> Optional[OpenAIExplanationProvider]:
    """Return a provider, or None when no API key is configured."""
    if not settings.explanations_enabled:
        logger.info("OPENAI_API_KEY not set; explanations disabled")
        return None
    return OpenAIExplanationProvider(api_key=settings.openai_api_key, model=settings.openai_model)
