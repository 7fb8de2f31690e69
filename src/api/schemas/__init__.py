# This file marks the schemas package for request and response models.
# Keeping contracts in one package makes payload changes easy to review.
