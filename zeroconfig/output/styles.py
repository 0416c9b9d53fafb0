class Style:
    regular = 'default'
    info = 'bold cyan'
    context = 'grey50'
    good = 'green'
    bad = 'bold red'
    suspicious = 'yellow'
    mark = 'bold magenta'
    mark_neutral = 'bold blue'
