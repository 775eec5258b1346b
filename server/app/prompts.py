# server/app/prompts.py
import json
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from app.errors import ConfigurationError, UpstreamFormatError

INTRO = (
    "Kamu adalah seorang ahli komunikasi dan psikologi wanita. Tugas kamu adalah menerjemahkan "
    "ucapan atau pesan dari seorang wanita yang sering kali tersirat atau tidak langsung menjadi "
    "makna yang sebenarnya dan lebih eksplisit.\n\n"
    "Contoh:\n"
    "Input: \"Terserah kamu deh...\"\n"
    "Output: \"Saya merasa kesal karena pendapat saya tidak didengar. Saya ingin Anda "
    "mempertimbangkan perasaan saya dalam mengambil keputusan ini.\"\n\n"
    "Input: \"Gak apa-apa kok\"\n"
    "Output: \"Sebenarnya saya merasa kecewa, tapi saya tidak ingin membuat masalah. Saya berharap "
    "Anda bisa memahami perasaan saya tanpa saya harus menjelaskan secara detail.\"\n\n"
    "Sekarang terjemahkan ucapan berikut dengan gaya yang sama - berikan makna yang sebenarnya di "
    "balik ucapan tersebut dengan cara yang sopan dan konstruktif:\n\n"
    "\"{text}\"\n\n"
    "Berikan terjemahan yang:\n"
    "1. Menjelaskan perasaan atau emosi yang sebenarnya\n"
    "2. Mengungkap kebutuhan atau harapan yang tersirat\n"
    "3. Menggunakan bahasa yang jelas dan mudah dipahami\n"
    "4. Membantu komunikasi yang lebih baik\n\n"
)

SIMPLE_OUTRO = "Jawab hanya dengan terjemahannya saja, tanpa penjelasan tambahan."

SUGGESTIONS_OUTRO = (
    "Selain itu, berikan tepat 3 saran balasan yang bisa diucapkan oleh pasangannya, masing-masing "
    "dengan alasan singkat mengapa balasan itu tepat.\n\n"
    "Jawab HANYA dengan satu objek JSON yang valid (tanpa teks lain, tanpa markdown) dengan format:\n"
    "{{\n"
    "  \"translation\": \"makna sebenarnya dari ucapan tersebut\",\n"
    "  \"suggestions\": [\n"
    "    {{\"text\": \"saran balasan 1\", \"reason\": \"alasan saran 1\"}},\n"
    "    {{\"text\": \"saran balasan 2\", \"reason\": \"alasan saran 2\"}},\n"
    "    {{\"text\": \"saran balasan 3\", \"reason\": \"alasan saran 3\"}}\n"
    "  ]\n"
    "}}"
)


def find_json_object(text: str) -> Optional[str]:
    """
    Return the first balanced {...} substring of `text`, or None.
    Braces inside JSON string literals are not counted.
    """
    start = text.find("{")
    while start != -1:
        depth = 0
        in_string = False
        escaped = False
        for i in range(start, len(text)):
            ch = text[i]
            if in_string:
                if escaped:
                    escaped = False
                elif ch == "\\":
                    escaped = True
                elif ch == '"':
                    in_string = False
                continue
            if ch == '"':
                in_string = True
            elif ch == "{":
                depth += 1
            elif ch == "}":
                depth -= 1
                if depth == 0:
                    return text[start:i + 1]
        start = text.find("{", start + 1)
    return None


class TranslationVariant(ABC):
    name: str
    outro: str
    generation_config: Dict[str, Any]

    def build_prompt(self, text: str) -> str:
        return (INTRO + self.outro).format(text=text)

    @abstractmethod
    def parse(self, raw_text: str) -> Dict[str, Any]:
        """Turn the generated text into the response body."""
        ...


class SimpleVariant(TranslationVariant):
    name = "simple"
    outro = SIMPLE_OUTRO
    generation_config = {
        "temperature": 0.7,
        "topK": 40,
        "topP": 0.95,
        "maxOutputTokens": 1024,
    }

    def parse(self, raw_text: str) -> Dict[str, Any]:
        translation = raw_text.strip()
        if not translation:
            raise UpstreamFormatError(details="Generated text is empty")
        return {"translation": translation, "success": True}


class SuggestionsVariant(TranslationVariant):
    name = "suggestions"
    outro = SUGGESTIONS_OUTRO
    generation_config = {
        "temperature": 0.7,
        "topK": 40,
        "topP": 0.95,
        "maxOutputTokens": 2048,
    }

    def parse(self, raw_text: str) -> Dict[str, Any]:
        # the model sometimes wraps the object in prose or code fences
        candidate = find_json_object(raw_text)
        if candidate is None:
            raise UpstreamFormatError(details="No JSON object found in generated text")
        try:
            return json.loads(candidate)
        except ValueError as e:
            raise UpstreamFormatError(details=f"Generated JSON could not be parsed: {e}") from e


VARIANTS = {
    SimpleVariant.name: SimpleVariant(),
    SuggestionsVariant.name: SuggestionsVariant(),
}


def get_variant(name: str) -> TranslationVariant:
    try:
        return VARIANTS[name]
    except KeyError:
        raise ConfigurationError(details=f"Unknown TRANSLATE_VARIANT {name!r}") from None
