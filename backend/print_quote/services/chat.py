import logging
import time
from datetime import datetime, timezone
from typing import Optional, Sequence

from print_quote.models.chat import ChatMessage, ChatReply, Language
from print_quote.models.quote import ServiceType
from print_quote.services.ai import GeminiClient
from print_quote.services.defaults import default_specification
from print_quote.services.pricing import PriceEngine

logger = logging.getLogger(__name__)

WELCOME_MESSAGES = {
    "ja": "こんにちは！印刷、製本、物流、環境印刷に関するご質問やお見積もりのお手伝いをさせていただきます。お気軽にお問い合わせください。",
    "en": "Hello! I can help you with printing, binding, logistics, and eco-friendly printing services. Feel free to ask any questions or request a quote.",
    "zh": "您好！我可以帮助您解决印刷、装订、物流和环保印刷服务的问题。欢迎随时提问或索取报价。",
    "ko": "안녕하세요! 인쇄, 제본, 물류 및 친환경 인쇄 서비스에 관한 문의나 견적에 도움을 드릴 수 있습니다. 언제든지 질문해 주세요.",
}

SYSTEM_PROMPTS = {
    "ja": "あなたは印刷業界のプロフェッショナルアシスタントです。印刷、製本、物流、環境印刷に関する質問に丁寧に回答してください。専門知識を活かして、わかりやすく説明してください。",
    "en": "You are a professional assistant in the printing industry. Please politely answer questions about printing, binding, logistics, and eco-friendly printing. Use your expertise to explain clearly.",
    "zh": "您是印刷行业的专业助手。请礼貌地回答有关印刷、装订、物流和环保印刷的问题。利用您的专业知识进行清晰解释。",
    "ko": "귀하는 인쇄 산업의 전문 어시스턴트입니다. 인쇄, 제본, 물류 및 친환경 인쇄에 관한 질문에 정중하게 답변해 주세요. 전문 지식을 활용하여 명확하게 설명해 주세요.",
}

# checked in order; the first service with a matching keyword wins
SERVICE_KEYWORDS = (
    (ServiceType.PRINTING, ("印刷", "名刺", "チラシ", "ポスター", "パンフレット",
                            "print", "flyer", "poster", "brochure", "business card")),
    (ServiceType.BINDING, ("製本", "冊子", "書籍", "ハードカバー", "ソフトカバー", "綴じ",
                           "binding", "bound", "hardcover", "softcover", "booklet")),
    (ServiceType.LOGISTICS, ("物流", "配送", "発送", "梱包", "保管", "輸送",
                             "logistics", "delivery", "shipping", "packaging", "storage")),
    (ServiceType.ECO_PRINTING, ("環境", "エコ", "リサイクル", "再生紙", "fsc", "カーボン",
                                "eco", "recycl", "carbon", "sustainab")),
)

QUOTE_KEYWORDS = ("見積", "quote", "estimate")

SPEAKER_NAMES = {"user": "お客様", "ai": "AIアシスタント"}


def detect_service_type(text: str) -> ServiceType:
    lowered = (text or "").lower()
    for service_type, keywords in SERVICE_KEYWORDS:
        if any(k in lowered for k in keywords):
            return service_type
    return ServiceType.PRINTING


def wants_quote(text: str) -> bool:
    lowered = (text or "").lower()
    return any(k in lowered for k in QUOTE_KEYWORDS)


def welcome_message(language: Language = "ja") -> ChatMessage:
    return ChatMessage(
        id=str(int(time.time() * 1000)),
        content=WELCOME_MESSAGES.get(language, WELCOME_MESSAGES["ja"]),
        sender="ai",
        timestamp=datetime.now(timezone.utc),
    )


def export_transcript(messages: Sequence[ChatMessage]) -> str:
    blocks = []
    for msg in messages:
        stamp = msg.timestamp.strftime("%Y/%m/%d %H:%M")
        blocks.append(f"[{stamp}] {SPEAKER_NAMES[msg.sender]}:\n{msg.content}\n")
    return "\n".join(blocks)


def transcript_filename(now: Optional[datetime] = None) -> str:
    now = now or datetime.now(timezone.utc)
    return f"chat-history-{now.strftime('%Y-%m-%dT%H-%M-%S')}.txt"


class ChatAssistant:
    """One conversational turn: classify the request, ask the model, and price it when asked."""

    def __init__(self, client: Optional[GeminiClient] = None, engine: Optional[PriceEngine] = None):
        self.client = client or GeminiClient()
        self.engine = engine or PriceEngine()

    def reply(self, text: str, language: Language = "ja") -> ChatReply:
        """Answer one user message.

        Only the latest message goes to the model; earlier turns are not replayed.
        """
        service_type = detect_service_type(text)
        logger.debug("Chat turn language=%s service=%s", language, service_type.value)

        system_prompt = SYSTEM_PROMPTS.get(language, SYSTEM_PROMPTS["ja"])
        content = self.client.generate(system_prompt, text)

        message = ChatMessage(
            id=str(int(time.time() * 1000) + 1),
            content=content,
            sender="ai",
            timestamp=datetime.now(timezone.utc),
        )

        quote = None
        if wants_quote(text):
            quote = self.engine.estimate(default_specification(service_type, custom_specs=text))
            logger.info("Chat produced quote id=%s service=%s price=%s", quote.id, service_type.value, quote.price)

        return ChatReply(message=message, service_type=service_type, quote=quote)
