from showcase.images.preprocessor import ImagePreprocessor, ProcessedImage, fit_within

__all__ = ["ImagePreprocessor", "ProcessedImage", "fit_within"]
