"""
AI text generation for comment drafting.

`TextGenerator.generate(prompt, fallback)` returns the provider's JSON reply,
or `fallback` unchanged when no key is configured, the SDK is missing, the
call fails, or the reply is not valid JSON. Nothing here raises.

Provider is picked from the model name: claude-* uses Anthropic, anything
else uses OpenAI.
"""
import json
import logging

logger = logging.getLogger(__name__)

JSON_SYSTEM_PROMPT = "You output valid JSON only. No prose. No markdown."
COMMENT_SYSTEM_PROMPT = "You write concise, professional teacher comments."


def _strip_fences(text):
    """Remove ```json fences some models wrap around replies."""
    text = (text or "").strip()
    if text.startswith("```"):
        first_nl = text.find("\n")
        last_fence = text.rfind("```")
        if first_nl != -1 and last_fence > first_nl:
            text = text[first_nl + 1:last_fence].strip()
    return text


def _complete_with_openai(api_key, model, system, prompt, temperature, json_mode):
    from openai import OpenAI
    client = OpenAI(api_key=api_key)
    kwargs = {}
    if json_mode:
        kwargs["response_format"] = {"type": "json_object"}
    response = client.chat.completions.create(
        model=model,
        temperature=temperature,
        messages=[
            {"role": "system", "content": system},
            {"role": "user", "content": prompt},
        ],
        **kwargs,
    )
    return (response.choices[0].message.content or "").strip()


def _complete_with_anthropic(api_key, model, system, prompt, temperature, json_mode):
    import anthropic
    client = anthropic.Anthropic(api_key=api_key)

    # Map model aliases to actual model names
    model_map = {
        'claude-sonnet': 'claude-sonnet-4-20250514',
        'claude-haiku': 'claude-3-5-haiku-20241022',
    }
    response = client.messages.create(
        model=model_map.get(model, model),
        max_tokens=1000,
        temperature=temperature,
        system=system,
        messages=[{"role": "user", "content": prompt}],
    )
    return response.content[0].text.strip()


class TextGenerator:
    """Pluggable completion capability with a guaranteed fallback."""

    def __init__(self, openai_api_key="", anthropic_api_key="", model="gpt-4o-mini"):
        self.openai_api_key = openai_api_key
        self.anthropic_api_key = anthropic_api_key
        self.model = model or "gpt-4o-mini"

    @classmethod
    def from_config(cls, config):
        return cls(config.openai_api_key, config.anthropic_api_key, config.ai_model)

    @property
    def provider(self):
        return "anthropic" if self.model.startswith("claude") else "openai"

    @property
    def available(self):
        key = self.anthropic_api_key if self.provider == "anthropic" else self.openai_api_key
        return bool(key)

    def _complete(self, system, prompt, temperature, json_mode):
        if self.provider == "anthropic":
            return _complete_with_anthropic(self.anthropic_api_key, self.model, system, prompt, temperature, json_mode)
        return _complete_with_openai(self.openai_api_key, self.model, system, prompt, temperature, json_mode)

    def generate(self, prompt, fallback, temperature=0.2):
        """Return the reply parsed as JSON, or `fallback` verbatim."""
        if not self.available:
            logger.debug("No %s API key configured; using fallback", self.provider)
            return fallback
        try:
            raw = self._complete(JSON_SYSTEM_PROMPT, prompt, temperature, json_mode=True)
            return json.loads(_strip_fences(raw))
        except ImportError as e:
            logger.error("%s package not installed: %s", self.provider, e)
        except json.JSONDecodeError as e:
            logger.error("AI returned non-JSON response: %s", e)
        except Exception as e:
            logger.error("AI call failed (%s): %s", self.provider, e)
        return fallback

    def complete_text(self, prompt, fallback, temperature=0.7, system=COMMENT_SYSTEM_PROMPT):
        """Return the plain-text reply, or `fallback` when unavailable or empty."""
        if not self.available:
            return fallback
        try:
            text = self._complete(system, prompt, temperature, json_mode=False)
        except ImportError as e:
            logger.error("%s package not installed: %s", self.provider, e)
            return fallback
        except Exception as e:
            logger.error("AI call failed (%s): %s", self.provider, e)
            return fallback
        return text or fallback
