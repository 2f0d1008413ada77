"""Pure kernel: record model, canonicalization, preimage encoding, summaries."""
