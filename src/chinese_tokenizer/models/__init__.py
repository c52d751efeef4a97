from .tokens import TokenizeMode, HMM, Word, WordWeight, TaggedWord

__all__ = [
    "TokenizeMode",
    "HMM",
    "Word",
    "WordWeight",
    "TaggedWord",
]
