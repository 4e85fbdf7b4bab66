class Interval:
    """
    closed range of integer positions. Used for the positions of features on a slice and for the regions of a
    coordinate mapping (1-based, inclusive)

    Example:
        >>> Interval(100, 150)
        Interval(100, 150)
        >>> len(Interval(100, 150))
        51
    """

    def __init__(self, start, end=None):
        """
        Args:
            start (int): the first position in the range
            end (int): the last position in the range. Defaults to the start (a single position)

        Raises:
            AttributeError: if the start is after the end
        """
        self.start = int(start)
        self.end = self.start if end is None else int(end)
        if self.start > self.end:
            raise AttributeError('interval start > end is not allowed', self.start, self.end)

    def __getitem__(self, index):
        if index == 0:
            return self.start
        elif index == 1:
            return self.end
        raise IndexError('an interval only has a start (0) and an end (1)', index)

    def __len__(self):
        return self.length()

    def length(self):
        return self.end - self.start + 1

    def __contains__(self, position):
        return self.start <= position <= self.end

    def __eq__(self, other):
        try:
            return (self.start, self.end) == (other[0], other[1])
        except (TypeError, IndexError, KeyError):
            return False

    def __hash__(self):
        return hash((self.start, self.end))

    def __repr__(self):
        return 'Interval({}, {})'.format(self.start, self.end)

    @classmethod
    def overlaps(cls, first, other):
        """
        True when two ranges (intervals or (start, end) tuples) share at least one position

        Example:
            >>> Interval.overlaps((1, 10), (10, 11))
            True
            >>> Interval.overlaps(Interval(1, 4), Interval(5, 7))
            False
        """
        return first[0] <= other[1] and other[0] <= first[1]

    @classmethod
    def union(cls, *intervals):
        """
        the smallest interval covering all of the input ranges

        Raises:
            AttributeError: no ranges were given

        Example:
            >>> Interval.union((100, 150), (200, 260))
            Interval(100, 260)
        """
        if not intervals:
            raise AttributeError('cannot compute the union of an empty set of intervals')
        return Interval(min([i[0] for i in intervals]), max([i[1] for i in intervals]))
