"""
Testing module of the minipaillier package.
"""

# Bit length of the keys under test. Far too small to be secure, but fast to generate.
TEST_KEY_LENGTH = 64
