"""TinySparks: age-appropriate play activity plans from Gemini, with saved favorites."""
