"""
scoring/ — Psychometric Readiness Scoring Engine

Modules:
    utils.py                   - Decimal utilities, renormalizing blend, elapsed days
    recency.py                 - Shared recency/decay curve
    personality_alignment.py   - Personality-role alignment scorer
    cognitive_readiness.py     - Cognitive readiness scorer (engagement decay)
    motivational_alignment.py  - Motivational alignment scorer (recency bonus)
    behavioral_predictors.py   - Behavioral predictor scorer
    confidence_calculator.py   - Predictive confidence (Spearman-Brown + dispersion)
    insights.py                - Insight / recommendation rule table
    individual_competency.py   - Individual competency from the learning record
    trends.py                  - Monthly trend direction and projection
    rollups.py                 - Department and organization rollups
    data_mapping.py            - Record validation and LMS/HR mapping
    readiness_aggregator.py    - Per-person and population aggregation
"""
