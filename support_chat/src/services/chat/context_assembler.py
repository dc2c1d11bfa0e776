"""Assembly of the message list sent to the completion API."""

from typing import Dict, List, Optional, Sequence

from support_chat.conf.config import Config
from support_chat.conf.prompts import FAQ_CONTEXT_TEMPLATE, SUPPORT_SYSTEM_PROMPT
from support_chat.src.data_classes import ChatMessage, FAQEntry, MessageRole


class ContextAssembler:
    """Builds the ordered role/content messages for one completion call.

    The result is always: the support system prompt, then the matched FAQ as a
    second system message when there is one, then the trailing window of the
    conversation history in chronological order. Older history is dropped.

    Attributes:
        system_prompt: Base instructions for the assistant
        faq_template: Format string with {question} and {answer} fields
        window_size: Number of trailing history messages forwarded
    """

    def __init__(
        self,
        system_prompt: str = SUPPORT_SYSTEM_PROMPT,
        faq_template: str = FAQ_CONTEXT_TEMPLATE,
        window_size: int = Config.HISTORY_WINDOW,
    ) -> None:
        self.system_prompt = system_prompt
        self.faq_template = faq_template
        self.window_size = window_size

    def format_faq(self, faq: FAQEntry) -> str:
        return self.faq_template.format(question=faq.question, answer=faq.answer)

    def build(
        self, matched_faq: Optional[FAQEntry], history: Sequence[ChatMessage]
    ) -> List[Dict[str, str]]:
        """Build the message list for the completion API.

        Args:
            matched_faq: FAQ entry relevant to the current message, if any
            history: Full conversation history, including the current user message

        Returns:
            Role/content dicts in the order they are sent upstream
        """
        messages = [{"role": MessageRole.SYSTEM.value, "content": self.system_prompt}]
        if matched_faq is not None:
            messages.append(
                {"role": MessageRole.SYSTEM.value, "content": self.format_faq(matched_faq)}
            )
        window = list(history)[-self.window_size :] if self.window_size > 0 else []
        messages.extend(message.to_prompt() for message in window)
        return messages
