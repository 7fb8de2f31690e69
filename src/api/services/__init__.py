# This file marks the services package for API domain logic modules.
# It exists so routers can depend on cohesive service classes instead of storage code.
# Service modules isolate delegation and input parsing from transport concerns.
