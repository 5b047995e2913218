"""Chat-style translator: conversation threads, speech bridge and translation clients."""
