"""Segmentation engine: token IR, tokenizer, plain and rule modes, cache."""
