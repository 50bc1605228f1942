import os
import time


def render_status(context, width):
    """
    context keys: status_msg, status_until, mode, file_path, row_count,
                   column_count, visible_count, focus, focus_column
    """
    text = ""
    now = time.time()
    if context.get('status_msg') and now < context.get('status_until', 0):
        text = f" {context['status_msg']}"
    else:
        mode = context.get('mode', 'unfocused')
        if mode == 'editing':
            label = 'GRID:EDIT'
        elif mode == 'columns':
            label = 'GRID:COLUMNS'
        else:
            label = 'GRID'
        fname = context.get('file_path') or ''
        if fname:
            fname = os.path.basename(fname)
        rows = context.get('row_count', 0)
        cols = context.get('column_count', 0)
        visible = context.get('visible_count', cols)
        shape = f"{rows}x{cols} ({visible} visible)"
        focus = context.get('focus')
        if focus is None:
            cell = "no cell"
        else:
            cell = f"r{focus[0]} c{focus[1]}"
            if context.get('focus_column'):
                cell += f" {context['focus_column']}"
        text = f" {label} | {fname} | {shape} | {cell}"

    return text.ljust(width)[:width]
