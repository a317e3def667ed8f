"""
Experiment scripts for fingerprint comparison.

1. exp_compare_fingerprints.py - Thin, extract and compare fingerprint images

Running Experiments:
-------------------
From the project root:

    python experiments/exp_compare_fingerprints.py thin data/1_1.png
    python experiments/exp_compare_fingerprints.py extract data/1_1.png
    python experiments/exp_compare_fingerprints.py compare data/1_1.png data/1_2.png
    python experiments/exp_compare_fingerprints.py compare-all data/1_1.png --data_dir data --finger 1
"""
