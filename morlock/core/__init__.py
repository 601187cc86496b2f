"""Stack-safe fold engine: thunks, trampoline, sequence views, combinators."""
