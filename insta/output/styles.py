class Style:
    regular = 'default'
    context = 'grey50'
    info = 'cyan'
    good = 'green'
    bad = 'red'
    suspicious = 'yellow'
    mark = 'bold magenta'
    mark_neutral = 'bold blue'
