# -*- coding: utf-8 -*-
from typing import Optional

from openai import OpenAI, OpenAIError

from . import config
from .errors import TransportError

# -----------------------
# SYSTEM PROMPTS
# -----------------------
PLANNER_PROMPT = """
You are a CAD drawing planner for AutoCAD.
Your job is to translate the user request into a JSON plan with drawing and editing actions, not instructions.

Rules:
- Always respond with pure JSON, no explanations, no Markdown.
- Root must be an object or an array of objects.
- Each object must have an 'action' field and parameters.
- Supported actions:
  1) 'line': {"action":"line","from":[x1,y1],"to":[x2,y2],"layer":"0"}
  2) 'polyline': {"action":"polyline","points":[[x1,y1],[x2,y2],...],"layer":"0","closed":false}
  3) 'rectangle': {"action":"rectangle","base":[x,y],"width":w,"height":h,"rotation":deg,"layer":"0"}
  4) 'circle': {"action":"circle","center":[x,y],"radius":r,"layer":"0"}
  5) 'polygon': {"action":"polygon","center":[x,y],"radius":r,"sides":n,"rotation":deg,"layer":"0"}
  6) 'move': {"action":"move","filter":{"layer":"WIRE"},"offset":[dx,dy]}
  7) 'rotate': {"action":"rotate","filter":{"layer":"WIRE"},"base":[x,y],"angle":deg}
  8) 'scale': {"action":"scale","filter":{"layer":"WIRE"},"base":[x,y],"factor":s}
  9) 'erase': {"action":"erase","filter":{"layer":"WIRE"}}
 10) 'insert_block': {"action":"insert_block","name":"MOTOR","position":[x,y],"scale":1.0,"rotation":deg,"layer":"0","attributes":{"TAG":"M1","DESC":"Motor"}}
 11) 'change_layer': {"action":"change_layer","filter":{"window":[[x1,y1],[x2,y2]]},"targetLayer":"CENTER"}
 12) 'change_properties': {"action":"change_properties","filter":{"layer":"0"},"colorIndex":2,"linetype":"CENTER","linetypeScale":0.5}
- Filters can also specify an entity type ("Line", "Polyline", "Circle", "BlockReference"),
  a selection window or a crossing window, for example:
  {"filter":{"window":[[x1,y1],[x2,y2]]}} or {"filter":{"crossing":[[x1,y1],[x2,y2]]}}.
- Coordinates are in drawing units, angles in degrees.
- Do not add comments or text outside JSON.
"""

CHAT_PROMPT = (
    "You are an assistant for AutoCAD Electrical. "
    "Answer briefly, in English, with clear step-by-step instructions "
    "for drawing, modifying, and auditing drawings."
)


class LlmClient:
    """Single blocking chat-completion round trip. No retries."""

    def __init__(
        self,
        api_key: str,
        base_url: str = config.API_URL,
        model: str = config.MODEL,
        temperature: float = config.TEMPERATURE,
        client: Optional[OpenAI] = None,
    ):
        self.model = model
        self.temperature = temperature
        self._client = client or OpenAI(api_key=api_key, base_url=base_url, max_retries=0)

    @classmethod
    def from_config(cls, settings_path: Optional[str] = None) -> "LlmClient":
        """Resolve the key (settings file, then environment). Raises ApiKeyError."""
        return cls(api_key=config.get_api_key(settings_path))

    def complete(self, system_prompt: str, user_text: str) -> str:
        try:
            resp = self._client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_text},
                ],
                temperature=self.temperature,
            )
        except OpenAIError as e:
            raise TransportError(f"{type(e).__name__}: {e}") from e

        if not resp.choices:
            raise TransportError("completion returned no choices")
        return (resp.choices[0].message.content or "").strip()

    def plan_text(self, user_text: str) -> str:
        """Raw plan text; may be fenced or not JSON at all."""
        return self.complete(PLANNER_PROMPT, user_text)

    def chat_text(self, user_text: str) -> str:
        return self.complete(CHAT_PROMPT, user_text) or "(no content)"
