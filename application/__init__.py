"""
Application Layer for the Workout Tracker API.

This package contains:
- ports/: Abstract repository interfaces (what the application needs)
- use_cases/: Template loading, workout saving and weight history lookups
- services/: WorkoutService facade over the use cases
- save_gate.py: Save cooldown and single-flight guard
- session.py: Async state holder for one workout logging flow
"""
