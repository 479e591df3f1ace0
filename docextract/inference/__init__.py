from docextract.inference.client_base import BaseInferenceClient, InlineMedia
from docextract.inference.factory import InferenceFactory
from docextract.inference.image_analyzer import ImageAnalyzer
from docextract.inference.reconstructor import TextReconstructor

__all__ = [
    "BaseInferenceClient",
    "ImageAnalyzer",
    "InferenceFactory",
    "InlineMedia",
    "TextReconstructor",
]
