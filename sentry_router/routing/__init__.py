"""Event routing — picks one destination project per envelope.

Routes are evaluated in table order and the first route with any
satisfied rule wins.  When nothing matches, or the envelope carries a
non-error category such as sessions, the last route (the default project)
is used.
"""
