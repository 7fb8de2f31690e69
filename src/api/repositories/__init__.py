# This file marks the repositories package for storage-layer modules.
# Repository classes own every SQL statement and translate driver failures into typed errors.
