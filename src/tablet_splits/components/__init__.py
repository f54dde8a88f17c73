"""Building blocks of split listing."""
