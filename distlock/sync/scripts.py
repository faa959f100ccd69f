"""Server-side Lua scripts for multi-key lock operations.

KEYS are the lock keys, ARGV[1] is the owner token and ARGV[2] the TTL in
milliseconds. Each script returns the list of keys it affected.
"""

ACQUIRE = """
local output = {}
for _, key in ipairs(KEYS) do
    if redis.call('set', key, ARGV[1], 'NX', 'PX', ARGV[2]) then
        table.insert(output, key)
    end
end
return output
"""

RENEW_IF_OWNED = """
local output = {}
for _, key in ipairs(KEYS) do
    if redis.call('get', key) == ARGV[1] then
        if redis.call('pexpire', key, ARGV[2]) == 1 then
            table.insert(output, key)
        end
    end
end
return output
"""

DELETE_IF_OWNED = """
local output = {}
for _, key in ipairs(KEYS) do
    if redis.call('get', key) == ARGV[1] then
        if redis.call('del', key) == 1 then
            table.insert(output, key)
        end
    end
end
return output
"""

ACQUIRE_OR_RENEW_IF_OWNED = """
local output = {}
for _, key in ipairs(KEYS) do
    local current = redis.call('get', key)
    if current == false then
        if redis.call('set', key, ARGV[1], 'PX', ARGV[2]) then
            table.insert(output, key)
        end
    elseif current == ARGV[1] then
        if redis.call('pexpire', key, ARGV[2]) == 1 then
            table.insert(output, key)
        end
    end
end
return output
"""
