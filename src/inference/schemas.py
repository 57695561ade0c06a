"""Hugging Face inference requests, one variant per task."""

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field, RootModel


class InferenceOptions(BaseModel):
    use_cache: bool | None = None
    wait_for_model: bool = True


class _InferenceBase(BaseModel):
    model_id: str = Field(min_length=1)
    options: InferenceOptions = Field(default_factory=InferenceOptions)

    model_config = {"protected_namespaces": ()}


class TextGenerationRequest(_InferenceBase):
    task: Literal["text-generation"]
    inputs: str = Field(min_length=1)
    parameters: dict[str, Any] = Field(default_factory=dict)


class FeatureExtractionRequest(_InferenceBase):
    task: Literal["feature-extraction"]
    inputs: str | list[str]


class ZeroShotClassificationRequest(_InferenceBase):
    task: Literal["zero-shot-classification"]
    inputs: str = Field(min_length=1)
    candidate_labels: list[str] = Field(min_length=1)


class ImageToTextRequest(_InferenceBase):
    task: Literal["image-to-text"]
    inputs: str = Field(min_length=1, description="Base64-encoded image")


class ObjectDetectionRequest(_InferenceBase):
    task: Literal["object-detection"]
    inputs: str = Field(min_length=1, description="Base64-encoded image")


class TextToImageRequest(_InferenceBase):
    task: Literal["text-to-image"]
    inputs: str = Field(min_length=1)
    parameters: dict[str, Any] = Field(default_factory=dict)


InferenceRequest = Annotated[
    Union[
        TextGenerationRequest,
        FeatureExtractionRequest,
        ZeroShotClassificationRequest,
        ImageToTextRequest,
        ObjectDetectionRequest,
        TextToImageRequest,
    ],
    Field(discriminator="task"),
]


class InferenceBody(RootModel[InferenceRequest]):
    pass
