from __future__ import annotations

import pytest

from utils.config import AppConfig


def build_config(**overrides) -> AppConfig:
    values = dict(
        groq_api_key=None,
        openai_api_key=None,
        anthropic_api_key=None,
        cartesia_api_key=None,
        model_preference="groq:llama3-8b-8192",
        transcription_model="whisper-large-v3",
        cartesia_model_id="sonic-english",
        cartesia_voice_id="voice-id",
        request_timeout_seconds=5,
        max_retries=3,
        log_level="DEBUG",
        history_path="problem_history.json",
    )
    values.update(overrides)
    return AppConfig(**values)


@pytest.fixture
def make_config():
    return build_config


SAMPLE_EVALUATION = """**Score: 3/5**

**Strengths:**
- Explained the CAP theorem clearly
- Used a concrete example

**Areas for Improvement:**
1. Discuss partition tolerance trade-offs
2. Mention quorum reads

**Key Points Missed:**
- Vector clocks

**Follow-up Question:** ### How would you handle a network partition?

**Ideal Response:**
A strong answer covers consistency models.```python
def read(key): ...
```
"""


@pytest.fixture
def sample_evaluation() -> str:
    return SAMPLE_EVALUATION
