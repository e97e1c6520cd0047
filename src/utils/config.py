import os
from typing import Optional

from pydantic import BaseModel, Field

BYTES_PER_MB = 1024 * 1024

# Checked in order; the first non-empty variable wins.
API_KEY_ENV_VARS = ("GOOGLE_API_KEY", "GEMINI_API_KEY", "API_KEY")


class AnalyzerConfig(BaseModel):
    """
    Configuration shared by the validator, the Gemini client and the session.
    Built once by the caller and passed in explicitly.
    """
    api_key: Optional[str] = Field(None, description="Credential for the Gemini API.")
    model_name: str = Field("gemini-2.5-flash", description="Model used for the analysis request.")
    max_file_size_mb: float = Field(150, gt=0, description="Per-file ceiling in MB.")
    max_total_size_mb: float = Field(300, gt=0, description="Ceiling for the whole working set in MB.")
    temperature: float = Field(0.2, ge=0.0, le=2.0, description="Sampling temperature, kept low for factual output.")
    settle_delay_seconds: float = Field(0.0, ge=0.0, description="Pause between PREPARING and ANALYZING.")

    @property
    def max_file_size_bytes(self) -> int:
        return int(self.max_file_size_mb * BYTES_PER_MB)

    @property
    def max_total_size_bytes(self) -> int:
        return int(self.max_total_size_mb * BYTES_PER_MB)

    @property
    def has_credential(self) -> bool:
        return bool(self.api_key and self.api_key.strip())

    @classmethod
    def from_env(cls, **overrides) -> "AnalyzerConfig":
        """Reads the credential and model name from the process environment."""
        values = {}
        for var in API_KEY_ENV_VARS:
            api_key = os.getenv(var)
            if api_key:
                values["api_key"] = api_key
                break
        model_name = os.getenv("APPFEATURE_MODEL")
        if model_name:
            values["model_name"] = model_name
        values.update(overrides)
        return cls(**values)
