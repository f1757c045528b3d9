from .factory import HintsOptimizerComponentFactory
from .pipeline import ClientHintsPipeline

__all__ = ["HintsOptimizerComponentFactory", "ClientHintsPipeline"]
