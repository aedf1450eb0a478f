"""Infrastructure layer — HTTP adapters for the stats backend and Discord.

Adapters translate transport failures into the exception types declared
next to each protocol; services classify those into ServiceResult codes.
"""
