"""Prompt templates for LLM interactions."""
from typing import Iterable


class PromptBuilder:
    """Builds prompts for SMS verification and transaction categorization."""

    VERIFICATION_PROMPT_TEMPLATE = """You are checking SMS messages received from Indian banks and payment apps.
Decide whether the message below reports a completed money movement (a debit, credit, card spend, UPI transfer, or refund) on the recipient's own account.

Messages that are NOT transactions include: OTPs, promotional offers, loan or card pre-approvals, payment reminders, bill due notices, and balance enquiries without a movement.

SMS:
\"\"\"{sms_text}\"\"\"

Generate a JSON response with the following structure:
{{
  "is_transaction": true or false,
  "confidence": 0.0-1.0,
  "reason": "one short sentence"
}}"""

    CATEGORY_PROMPT_TEMPLATE = """You are a financial transaction categorizer. Analyze this transaction and categorize it into exactly one of these categories: {category_options}.

Transaction details:
- Description: "{description}"
- Amount: {amount}

Consider the merchant name, keywords, and transaction context.

Generate a JSON response with the following structure:
{{
  "category": "one of the categories above",
  "confidence": 0.0-1.0
}}"""

    def build_verification_prompt(self, sms_text: str) -> str:
        return self.VERIFICATION_PROMPT_TEMPLATE.format(sms_text=sms_text)

    def build_category_prompt(
        self,
        description: str,
        amount: float,
        category_names: Iterable[str],
    ) -> str:
        options = ", ".join(name for name in category_names if name != "Others")
        return self.CATEGORY_PROMPT_TEMPLATE.format(
            category_options=options,
            description=description,
            amount=amount,
        )
