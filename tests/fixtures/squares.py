def even_squares(limit):
    result = []
    for n in range(limit):
        if n % 2 == 0:
            result.append(n * n)
    return result
