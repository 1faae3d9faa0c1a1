"""Tests for short code generation."""

import random
import string

from shortener.shortcode import ShortCodeGenerator


class TestShortCodeGenerator:
    """Test short code generation."""
    
    def test_generate_random(self):
        """Generated codes are 6 base36 characters."""
        generator = ShortCodeGenerator(default_length=6)
        
        code = generator.generate_random()
        assert len(code) == 6
        assert set(code) <= set(string.digits + string.ascii_lowercase)
    
    def test_generate_random_custom_length(self):
        generator = ShortCodeGenerator(default_length=6)
        
        code = generator.generate_random(length=10)
        assert len(code) == 10
        assert set(code) <= set(ShortCodeGenerator.BASE36_CHARS)
    
    def test_seeded_generation_is_reproducible(self):
        first = ShortCodeGenerator(rng=random.Random(42))
        second = ShortCodeGenerator(rng=random.Random(42))
        
        assert [first.generate_random() for _ in range(5)] == [second.generate_random() for _ in range(5)]
    
    def test_allocate_returns_free_code(self):
        generator = ShortCodeGenerator(rng=random.Random(7))
        
        code = generator.allocate(lambda candidate: False)
        assert len(code) == 6
    
    def test_allocate_skips_taken_codes(self):
        """Allocation keeps drawing until the membership test says free."""
        seeded = ShortCodeGenerator(rng=random.Random(7))
        taken = [seeded.generate_random() for _ in range(3)]
        generator = ShortCodeGenerator(rng=random.Random(7))
        seen = []
        
        def is_taken(candidate):
            seen.append(candidate)
            return candidate in taken
        
        code = generator.allocate(is_taken)
        
        assert code not in taken
        assert seen[:3] == taken
        assert len(seen) == 4
    
    def test_allocate_uses_whole_alphabet(self):
        generator = ShortCodeGenerator(rng=random.Random(0))
        
        chars = set()
        for _ in range(500):
            chars.update(generator.allocate(lambda candidate: False))
        
        assert chars == set(ShortCodeGenerator.BASE36_CHARS)
    
