"""
Numerical constants and defaults for zero-probability event analysis.

This module defines the default neighborhood radii, Monte Carlo sample
counts and sampling budgets used across the toolkit. Every value here can
be overridden per call through the corresponding keyword argument.
"""

# Relevance measure defaults
DEFAULT_EPSILON = 0.01  # Neighborhood radius for ε-neighborhood relevance
DECISION_THEORY_EPSILON = 0.05  # Fixed 5% window for decision-theoretic scoring
DEFAULT_HAUSDORFF_DIMENSION = 0  # A point has unit 0-dimensional measure

# Monte Carlo estimation
DEFAULT_MC_SAMPLES = 10_000  # Draws for expected-impact estimation

# Model verification
DEFAULT_VERIFY_SAMPLES = 100  # Samples fed to the model per event
REJECTION_ATTEMPT_MULTIPLIER = 1000  # Attempt budget = num_samples × multiplier
REJECTION_BATCH_SIZE = 4096  # Variates drawn per batch during rejection sampling

# Market crash severity thresholds (fractional return)
CATASTROPHIC_THRESHOLD = -0.5  # -50%
HIGH_THRESHOLD = -0.3  # -30%
MODERATE_THRESHOLD = -0.1  # -10%, used for any other severity tag

# Market crash defaults
DEFAULT_LOSS = 1_000_000  # Loss incurred when the crash threshold is breached
DEFAULT_MEAN_RETURN = 0.001  # 0.1% daily mean return
DEFAULT_VOLATILITY = 0.02  # 2% daily volatility
