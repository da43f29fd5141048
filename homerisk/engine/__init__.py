"""
HomeRisk Scoring Engine — pure, deterministic home-system risk math.

Components:
- calibration: Versioned per-type lifespan, failure-curve and urgency constants
- lifespan: Install date + evidence → p10/p50/p90 replacement window
- failure_probability: Years remaining → 12-month failure probability
- urgency: Situational dollar premiums from the active risk context
- intervention: Frozen intervention score, eligibility and snapshots
- impact: Estimated value of completing a maintenance action
- timeline: Multi-system, render-ready replacement timeline
"""
