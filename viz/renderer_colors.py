# viz/renderer_colors.py
BG = (14, 16, 22)
GRID = (26, 29, 38)
HEAD = (170, 255, 180)
BODY = (70, 210, 100)
BODY_TAIL = (40, 140, 64)   # body colour fades toward this at the tail
FOOD = (210, 60, 60)     # kept dimmer than the darkest body segment
TEXT = (230, 230, 230)
