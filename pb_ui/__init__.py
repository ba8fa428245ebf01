"""Terminal front end for perturbation-bench."""
